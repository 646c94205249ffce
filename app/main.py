
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from typing import Dict, Literal
from arith.analyzer import analyze
from arith.ast_utils import ast_to_dict, ast_to_pretty
from arith.errors import EvaluationError, ParseError
from arith.eval import Context, evaluate
from arith.parser import parse_expression
from arith.printer import print_expression

FormName = Literal["natural", "prefix", "postfix"]

# nested JSON for /ast is encoded recursively
MAX_AST_DEPTH = 500

app = FastAPI(title="Integer expression DSL")

class ParseBody(BaseModel):
    text: str
    form: FormName = "natural"

class EvalBody(ParseBody):
    bindings: Dict[str, int] = {}

class PrintBody(ParseBody):
    target: Literal["prefix", "postfix"] = "prefix"


def _parse(body: ParseBody):
    try:
        return parse_expression(body.text, body.form)
    except ParseError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/parse")
def parse(body: ParseBody):
    meta = analyze(_parse(body))
    return {
        "ok": True,
        "variables": sorted(meta.variables),
        "operators": sorted(meta.operators),
        "depth": meta.depth,
        "size": meta.size,
    }

@app.post("/evaluate")
def evaluate_api(body: EvalBody):
    tree = _parse(body)
    try:
        ctx = Context(body.bindings)
        return {"result": evaluate(tree, ctx)}
    except (ValueError, EvaluationError) as e:
        raise HTTPException(status_code=400, detail=str(e))

@app.post("/print")
def print_api(body: PrintBody):
    tree = _parse(body)
    return {"text": print_expression(tree, body.target)}

@app.post("/ast")
def ast_view(body: ParseBody):
    tree = _parse(body)
    depth = analyze(tree).depth
    if depth > MAX_AST_DEPTH:
        raise HTTPException(status_code=400, detail=f"Tree depth {depth} exceeds {MAX_AST_DEPTH}; use /print instead")
    return {
        "ok": True,
        "pretty": ast_to_pretty(tree),
        "tree": ast_to_dict(tree),
    }
