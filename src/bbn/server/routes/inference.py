"""
Inference routes: /api/infer

Each request carries its own network, so the server holds no state.
"""

import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from bbn.core.errors import InferenceError
from bbn.core.inference import (
    branch_terms,
    joint_term_product,
    normalized_posterior,
    predict_outcome,
    resolve_target,
)
from bbn.server.deps import load_document


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/infer", tags=["infer"])


class InferenceRequest(BaseModel):
    dsl: str
    target: dict[str, str | bool]
    evidence: dict[str, str | bool] = Field(default_factory=dict)


def _run(fn, req: InferenceRequest):
    doc = load_document(req.dsl)
    try:
        return doc.network, fn(doc.network, req.target, req.evidence)
    except InferenceError as e:
        logger.info("Inference failed: %s", e)
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/joint")
async def joint(req: InferenceRequest):
    """Unnormalized joint term for the target value as given."""
    _, value = _run(joint_term_product, req)
    return {"target": req.target, "joint": value}


@router.post("/normalization")
async def normalization(req: InferenceRequest):
    """Both branch terms and their sum."""
    _, terms = _run(branch_terms, req)
    return {
        "target": terms.target,
        "true_term": terms.true_term,
        "false_term": terms.false_term,
        "normalization": terms.total,
    }


@router.post("/posterior")
async def posterior(req: InferenceRequest):
    """P(target = value | evidence)."""
    network, value = _run(normalized_posterior, req)
    name, target_value = resolve_target(network, req.target)
    return {"target": name, "value": target_value, "probability": value}


@router.post("/predict")
async def predict(req: InferenceRequest):
    """Most likely value of the target."""
    network, outcome = _run(predict_outcome, req)
    name, _ = resolve_target(network, req.target)
    return {"target": name, "outcome": outcome}
