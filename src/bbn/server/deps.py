"""
Shared dependencies for routes.
"""

from fastapi import HTTPException

from bbn.core.errors import InferenceError
from bbn.core.network_lang import NetworkDocument, ParseError, parse_network


def load_document(dsl: str) -> NetworkDocument:
    """Parse request DSL, turning parse failures into 400s."""
    try:
        return parse_network(dsl)
    except (ParseError, InferenceError) as e:
        raise HTTPException(status_code=400, detail=str(e))
