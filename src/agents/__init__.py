"""
Agent implementations for Social Proof Studio.

- Review Fetch Agent: builds the prompt and calls Gemini once
- Response Validator: turns the reply text into ReviewsData or a typed error
"""
