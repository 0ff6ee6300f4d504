"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Identify the dish in a photo with a vision model.
- Run the web-grounded place search and map its citations to grounding chunks.
- Collapse every upstream failure into a single AnalysisFailed.
"""
