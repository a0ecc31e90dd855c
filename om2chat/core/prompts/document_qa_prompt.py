"""
Document Q&A prompt.

System instruction grounding the assistant in one document's retrieved
context, followed by the user's question as a separate turn.

Dependencies: langchain_core.prompts
System role: Prompt template for the completion step
"""

from langchain_core.prompts import ChatPromptTemplate

SYSTEM_PROMPT = (
    'You are a helpful assistant for the document "{title}". '
    "Use only the provided context to answer.\n\n"
    "Context:\n{context}"
)

DOCUMENT_QA_PROMPT = ChatPromptTemplate.from_messages([
    ("system", SYSTEM_PROMPT),
    ("human", "{question}"),
])
