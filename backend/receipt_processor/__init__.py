"""Top-level application package for the receipt points API.

This package contains everything required to run the FastAPI service
that accepts retail receipts and scores them. It includes the Pydantic
schemas for the wire format, the scoring rule engine, the in-memory
receipt registry and the API routers.

To run the API locally you can execute:

```bash
uvicorn receipt_processor.api.main:app --reload --port 8080
```

or use the bundled ``receipt-processor`` console script. Configuration
values can be overridden with environment variables or a ``.env`` file
at the project root.
"""

__version__ = "1.0.0"

__all__: list[str] = ["__version__"]
