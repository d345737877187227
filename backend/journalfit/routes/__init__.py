# Routes package init
"""
JournalFit Backend — API Routes Package
=========================================

Route Inventory:
    - documents.py: POST /documents/analyze
                    POST /documents/generate-by-template
                    POST /documents/generate-by-template-docx
    - health.py:    GET  /health

Routes are THIN: they unpack the request body, call DocumentService and
shape the response. Provider failures propagate as ProviderRequestError
and are rendered by the global handler in main.py.
"""
