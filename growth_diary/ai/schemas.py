from typing import Any, Dict, List, Literal, Optional, Union
from pydantic import BaseModel


class TipsRequest(BaseModel):
    context: Optional[str] = None
    items: Union[List[Dict[str, Any]], Dict[str, Any]] = []


class TipsResponse(BaseModel):
    tips: str
    source: Literal["ai", "curated"]


class Quote(BaseModel):
    text: str
    author: str
