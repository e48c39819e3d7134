"""
Network routes: /api/networks
"""

from fastapi import APIRouter
from pydantic import BaseModel

from bbn.core.network import DEFAULT_TOLERANCE
from bbn.server.deps import load_document


router = APIRouter(prefix="/api/networks", tags=["networks"])


class ParseRequest(BaseModel):
    dsl: str


class CheckRequest(BaseModel):
    dsl: str
    tolerance: float = DEFAULT_TOLERANCE


@router.post("/parse")
async def parse(req: ParseRequest):
    """Parse DSL into a network dict plus its queries."""
    doc = load_document(req.dsl)
    return {
        "network": doc.network.to_dict(),
        "stats": doc.network.stats(),
        "queries": [q.to_dict() for q in doc.queries],
    }


@router.post("/check")
async def check(req: CheckRequest):
    """Validate CPT completeness, sum-to-one and acyclicity."""
    doc = load_document(req.dsl)
    problems = doc.network.validate(req.tolerance)
    return {"valid": not problems, "problems": problems}
