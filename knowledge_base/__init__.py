"""Knowledge base backend: document storage, embedding index, and retrieval-augmented chat."""
