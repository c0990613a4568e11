"""
Answer generation prompt.

Fixed system prompt and human template for grounded answers over the
assembled knowledge-base context.

Dependencies: langchain_core.prompts
System role: Prompt template for the answer generator
"""

from langchain_core.prompts import ChatPromptTemplate

SYSTEM_PROMPT = """You are a helpful assistant for our company knowledge base, covering our policies and our people.

## Instructions
1. Answer using ONLY the provided context
2. Mention which policy or person the information comes from
3. Be concise and accurate
4. If the context does not contain enough information, say so clearly instead of guessing
5. Keep a professional and friendly tone"""

HUMAN_TEMPLATE = """Context from our knowledge base:

{context}

Question: {question}"""

ANSWER_PROMPT = ChatPromptTemplate.from_messages([
    ("system", SYSTEM_PROMPT),
    ("human", HUMAN_TEMPLATE),
])
