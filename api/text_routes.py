"""
Text API Routes

Stateless text endpoints used by the editor: display rendering, structural
segmentation of recognized text and the LaTeX fragment import.
"""

from typing import List

from fastapi import APIRouter
from pydantic import BaseModel, Field

from core.latex import render_markdown_with_latex
from core.segmentation import segment, parse_latex_content, LATEX_EXAMPLE


class TextRequest(BaseModel):
    text: str = Field(default="", description="Markdown + LaTeX source")


class RenderResponse(BaseModel):
    html: str


class SegmentResponse(BaseModel):
    content: str
    answer: str
    analysis: str
    tags: List[str]


class LatexParseRequest(BaseModel):
    latex: str = Field(default="", description="Pasted LaTeX question fragment")


class LatexParseResponse(BaseModel):
    title: str
    content: str
    answer: str
    analysis: str


router = APIRouter(prefix="/api", tags=["Text"])


@router.post("/render", response_model=RenderResponse)
async def render_text(payload: TextRequest):
    """Render Markdown with embedded LaTeX to display HTML."""
    return RenderResponse(html=render_markdown_with_latex(payload.text))


@router.post("/segment", response_model=SegmentResponse)
async def segment_text(payload: TextRequest):
    """Split recognized text into content, answer, analysis and tags."""
    return segment(payload.text).to_dict()


@router.post("/latex/parse", response_model=LatexParseResponse)
async def parse_latex(payload: LatexParseRequest):
    return parse_latex_content(payload.latex).to_dict()


@router.get("/latex/example")
async def latex_example():
    return {"latex": LATEX_EXAMPLE}
