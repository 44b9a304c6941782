from typing import Dict, List

from pydantic import BaseModel, ConfigDict


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class PageInfo(_Frozen):
    url: str
    final_url: str = ""
    status_code: int = 0
    response_time_ms: int = 0
    content_length: int = 0
    content_type: str = ""
    word_count: int = 0
    language: str = ""
    charset: str = ""
    has_https: bool = False
    has_robots_txt: bool = False
    robots_txt_content: str = ""
    has_sitemap: bool = False


class MetaInfo(_Frozen):
    title: str = ""
    title_length: int = 0
    description: str = ""
    description_length: int = 0
    keywords: str = ""
    viewport: str = ""
    robots: str = ""
    canonical: str = ""
    og_title: str = ""
    og_description: str = ""
    og_image: str = ""
    og_type: str = ""
    twitter_card: str = ""
    twitter_title: str = ""
    twitter_description: str = ""


class HeadingInfo(_Frozen):
    tag: str
    text: str
    level: int


class LinkInfo(_Frozen):
    url: str
    text: str = ""
    is_internal: bool = True
    is_nofollow: bool = False
    has_title: bool = False


class ImageInfo(_Frozen):
    src: str
    alt: str = ""
    has_alt: bool = False
    width: str = ""
    height: str = ""
    is_lazy_loaded: bool = False


class StructuredDataItem(_Frozen):
    type: str
    properties: Dict[str, str] = {}
    raw_json: str = ""


class PageData(_Frozen):
    """Everything the rule engine knows about one fetched page.

    ``headings`` is kept in document order; the hierarchy and duplicate
    checks depend on it.
    """

    page_info: PageInfo
    meta: MetaInfo = MetaInfo()
    headings: List[HeadingInfo] = []
    links: List[LinkInfo] = []
    images: List[ImageInfo] = []
    structured_data: List[StructuredDataItem] = []
    raw_html: str = ""
    text_content: str = ""
