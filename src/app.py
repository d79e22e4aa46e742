"""Furniture Marketplace FastAPI application.

Commands are processed synchronously inside each HTTP request.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# PROTEAN_ENV controls which config overlay is applied:
#   - "test"       → event_processing = "sync"  (projectors fire in UoW)
#   - "production" → event_processing = "async" (projectors fire via Engine)
from marketplace.api import create_app
from marketplace.domain import marketplace

# Initialized at module level so uvicorn workers share the domain
marketplace.init()

app = create_app()
