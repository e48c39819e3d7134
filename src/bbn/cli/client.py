"""
HTTP client for the bbn API.
"""

import os

import httpx

BASE_URL = os.environ.get("BBN_API_URL", "http://localhost:8000/api")


def _post(path: str, payload: dict, http: httpx.Client | None = None) -> dict:
    if http is not None:
        r = http.post(path, json=payload)
    else:
        r = httpx.post(f"{BASE_URL}{path}", json=payload, timeout=60)
    r.raise_for_status()
    return r.json()


def _inference_payload(dsl: str, target: dict, evidence: dict) -> dict:
    return {"dsl": dsl, "target": target, "evidence": evidence}


# === Inference ===

def joint(dsl: str, target: dict, evidence: dict, http: httpx.Client | None = None) -> dict:
    return _post("/infer/joint", _inference_payload(dsl, target, evidence), http)


def normalization(dsl: str, target: dict, evidence: dict, http: httpx.Client | None = None) -> dict:
    return _post("/infer/normalization", _inference_payload(dsl, target, evidence), http)


def posterior(dsl: str, target: dict, evidence: dict, http: httpx.Client | None = None) -> dict:
    return _post("/infer/posterior", _inference_payload(dsl, target, evidence), http)


def predict(dsl: str, target: dict, evidence: dict, http: httpx.Client | None = None) -> dict:
    return _post("/infer/predict", _inference_payload(dsl, target, evidence), http)


# === Networks ===

def parse(dsl: str, http: httpx.Client | None = None) -> dict:
    return _post("/networks/parse", {"dsl": dsl}, http)


def check(dsl: str, tolerance: float | None = None, http: httpx.Client | None = None) -> dict:
    payload = {"dsl": dsl}
    if tolerance is not None:
        payload["tolerance"] = tolerance
    return _post("/networks/check", payload, http)
