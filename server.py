#!/usr/bin/env python3
"""FastAPI server for clausal - first-order formulas to clausal normal form"""
from __future__ import annotations

import os
import json
import hashlib
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, List, Dict, Any
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from clausal.pipeline import run_pipeline
from clausal.settings import Settings
import clausal as _clausal_pkg

log = logging.getLogger(__name__)

app = FastAPI(title="Clausal API", version=_clausal_pkg.__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

class NormalizeRequest(BaseModel):
    formula: str
    notation: Optional[str] = None  # "latex" or "text"; defaults to CLAUSAL_NOTATION
    strict_lexing: Optional[bool] = None
    check_invariants: Optional[bool] = None

def saved_dir() -> Path:
    return Path(Settings.from_env().saved_dir)

@app.get("/api/health")
def health():
    """Health check endpoint"""
    return {
        "ok": True,
        "version": _clausal_pkg.__version__,
        "package_path": _clausal_pkg.__file__
    }

@app.post("/api/normalize")
def normalize(req: NormalizeRequest) -> Dict[str, Any]:
    """Run a formula through every stage and return all of them.

    Parse and transformation failures are part of a successful response: they
    show up as the final, error-flagged step.
    """
    if not req.formula.strip():
        raise HTTPException(status_code=400, detail="Formula cannot be empty")
    try:
        result = run_pipeline(
            req.formula,
            notation=req.notation,
            strict_lexing=req.strict_lexing,
            check_invariants=req.check_invariants
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    response = {
        "success": True,
        "result": result.model_dump(),
    }
    saved_hash = save_query(req)
    response["saved_hash"] = saved_hash
    save_results(saved_hash, response)
    return response

def save_query(req: NormalizeRequest) -> str:
    """Save a query to the saved/ directory and return its hash"""
    directory = saved_dir()
    directory.mkdir(parents=True, exist_ok=True)

    query_data = {
        "formula": req.formula,
        "notation": req.notation,
        "strict_lexing": req.strict_lexing,
        "check_invariants": req.check_invariants,
        "timestamp": datetime.now().isoformat()
    }

    # Hash the query content (excluding timestamp)
    query_str = json.dumps({k: v for k, v in query_data.items() if k != "timestamp"}, sort_keys=True)
    query_hash = hashlib.sha256(query_str.encode()).hexdigest()[:12]

    with open(directory / f"{query_hash}.json", 'w', encoding="utf-8") as f:
        json.dump(query_data, f, indent=2, ensure_ascii=False)
    return query_hash

def save_results(query_hash: str, response: Dict[str, Any]) -> None:
    """Save full results next to the query, under saved/results/"""
    results_dir = saved_dir() / "results"
    results_dir.mkdir(parents=True, exist_ok=True)
    try:
        with open(results_dir / f"{query_hash}.json", 'w', encoding="utf-8") as f:
            json.dump(response, f, indent=2, ensure_ascii=False)
    except OSError as e:
        # Don't fail the request if results caching fails
        log.warning("Failed to cache results for %s: %s", query_hash, e)

@app.get("/api/saved")
def list_saved_queries() -> List[Dict[str, Any]]:
    """List all saved queries, newest first"""
    directory = saved_dir()
    if not directory.exists():
        return []

    queries = []
    for file_path in directory.glob("*.json"):
        try:
            with open(file_path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            log.warning("Skipping unreadable saved query %s: %s", file_path.name, e)
            continue
        queries.append({
            "hash": file_path.stem,
            "formula": data.get("formula", ""),
            "timestamp": data.get("timestamp"),
            "notation": data.get("notation"),
        })

    queries.sort(key=lambda x: x.get("timestamp") or "", reverse=True)
    return queries

def load_saved(query_hash: str) -> Dict[str, Any]:
    file_path = saved_dir() / f"{query_hash}.json"
    if not file_path.exists():
        raise HTTPException(status_code=404, detail="Saved query not found")
    with open(file_path, encoding="utf-8") as f:
        return json.load(f)

@app.get("/api/saved/{query_hash}")
def get_saved_query(query_hash: str) -> Dict[str, Any]:
    """Retrieve a specific saved query by hash"""
    return load_saved(query_hash)

def get_plain_content(query: Dict[str, Any], result: Dict[str, Any], format_type: str) -> tuple[str, str]:
    """Extract plain content from a rerun query.

    Returns (content, content_type) tuple.
    """
    if format_type in ("md", "markdown"):
        return result.get("report_md") or "No markdown report available", "text/markdown"
    if format_type in ("txt", "text"):
        return query.get("formula", ""), "text/plain"
    if format_type in ("tptp", "p"):
        return "\n".join(result.get("tptp") or []) + "\n", "text/plain"
    return json.dumps({"query": query, "result": result}, indent=2, ensure_ascii=False), "application/json"

@app.get("/plain/{query_hash}/{format_type}")
def get_plain_query_format(query_hash: str, format_type: str):
    """Rerun a saved query and return it in a plain format

    Supported formats:
    - md/markdown: Markdown report
    - txt/text: Source formula only
    - tptp/p: Clause set as TPTP cnf lines
    - json: Full JSON data (also the fallback)
    """
    query = load_saved(query_hash)
    result = run_pipeline(
        query.get("formula", ""),
        notation=query.get("notation"),
        strict_lexing=query.get("strict_lexing"),
        check_invariants=query.get("check_invariants")
    ).model_dump()
    content, content_type = get_plain_content(query, result, format_type.lower())
    return PlainTextResponse(content=content, media_type=content_type)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("server:app", host="0.0.0.0", port=int(os.getenv("PORT", "8000")), reload=True)
