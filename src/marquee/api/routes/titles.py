"""Title parsing endpoint."""

from fastapi import APIRouter, Query

from marquee.schemas import ParsedTitleResponse
from marquee.utils.text import parse_title

router = APIRouter()


@router.get("/titles/parse", response_model=ParsedTitleResponse)
async def parse_listing_title(
    title: str = Query(..., min_length=1, description="Listing title to parse"),
) -> ParsedTitleResponse:
    """Show how a listing title is cleaned before matching."""
    return ParsedTitleResponse.model_validate(parse_title(title))
