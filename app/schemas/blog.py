from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class PostSummaryData(BaseModel):
    title: str
    subtitle: Optional[str] = None
    author: Optional[str] = None


class PostSummary(BaseModel):
    uid: str
    first_publication_date: Optional[str] = None
    data: PostSummaryData


class PostPagination(BaseModel):
    next_page: Optional[str] = None
    results: List[PostSummary] = Field(default_factory=list)


class Banner(BaseModel):
    url: Optional[str] = None


class ContentBlock(BaseModel):
    heading: str = ""
    body: List[Dict[str, Any]] = Field(default_factory=list)


class PostDetailData(PostSummaryData):
    banner: Banner = Field(default_factory=Banner)
    content: List[ContentBlock] = Field(default_factory=list)


class AdjacentPost(BaseModel):
    uid: str
    title: str


class PostDetail(BaseModel):
    uid: str
    first_publication_date: Optional[str] = None
    last_publication_date: Optional[str] = None
    data: PostDetailData
    prevPost: Optional[AdjacentPost] = None
    nextPost: Optional[AdjacentPost] = None


class LoadMoreResponse(BaseModel):
    html: str
    next_page: Optional[str] = None
