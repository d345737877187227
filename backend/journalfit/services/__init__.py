# Services package init
"""
JournalFit Backend — Services Layer
=====================================

What:  Everything between the routes and the provider SDKs.

Service Inventory:
    - LLMService (abstract): contract shared by the three provider services
    - OpenAIService / ClaudeService / GeminiService: one per AI provider
    - DocumentService: provider selection, dispatch and error envelope
    - error_classifier: (status, message) for any provider failure
    - guidelines: journal style-guide lookup
    - docx_service: plain text → .docx bytes

Routes only ever talk to DocumentService and docx_service.
"""
