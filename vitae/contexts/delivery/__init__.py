"""
Delivery Context

Responsibilities:
- Serves preview HTML and exported PDFs over HTTP
- Publishes the template catalog to the editor
- Maps export failures to status codes and JSON error bodies

Owns: HTTP surface (FastAPI app)
Never: Renders templates or drives browsers itself
"""
