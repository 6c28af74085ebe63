"""
CORS Filter

Allow-list based Cross-Origin Resource Sharing filter for FastAPI and
Starlette applications. Reflects permitted origins back in the CORS response
headers and answers preflight requests before they reach the application.
"""

__version__ = "0.1.0"
