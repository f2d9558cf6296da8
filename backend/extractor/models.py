"""
Extractor Data Models
定义数据结构和类型

包含：
- ExtractRequest: /extract 请求体
- Article: 可读文章（标题、纯文本、HTML）
- StyleSummary: 页面样式摘要（字体、颜色、间距、组件）
- ExtractResponse: /extract 响应体

JSON uses camelCase field names; Python attributes stay snake_case.
"""

from typing import Optional
from pydantic import BaseModel, Field

from core.models import CamelModel


# ==================== Style Models ====================

class TypographyStyles(CamelModel):
    """
    排版样式
    Body text comes from the sampled paragraph, heading fields from the first h1-h3
    """
    font_family: str = ""
    font_size: str = ""
    line_height: str = ""
    font_weight: str = ""
    heading_font_family: str = ""
    heading_font_weight: str = ""
    heading_color: str = ""


class ColorStyles(CamelModel):
    """
    颜色
    """
    text: str = ""
    background: str = ""
    link: str = ""


class SpacingStyles(CamelModel):
    """
    间距
    """
    paragraph_margin: str = ""
    container_padding: str = ""
    container_max_width: str = ""


class ComponentStyles(CamelModel):
    """
    按钮 / 输入框 / 链接样式
    """
    button_background: str = ""
    button_color: str = ""
    button_border_radius: str = ""
    button_padding: str = ""
    button_border: str = ""
    input_border: str = ""
    input_border_radius: str = ""
    input_padding: str = ""
    input_background: str = ""
    link_text_decoration: str = ""


class StyleSummary(CamelModel):
    """
    页面样式摘要
    Computed CSS of one sampled element per category; absent values are ""
    """
    typography: TypographyStyles = Field(default_factory=TypographyStyles)
    colors: ColorStyles = Field(default_factory=ColorStyles)
    spacing: SpacingStyles = Field(default_factory=SpacingStyles)
    components: ComponentStyles = Field(default_factory=ComponentStyles)


# ==================== Article Models ====================

class Article(BaseModel):
    """
    Readable article isolated from a page
    """
    title: str
    content: str        # plain text
    html: str           # article markup


# ==================== Request / Response ====================

class ExtractRequest(BaseModel):
    """
    POST /extract
    """
    url: Optional[str] = None


class ExtractResponse(CamelModel):
    """
    Article plus the style summary of the page it came from
    """
    title: str
    content: str
    html: str
    style_summary: StyleSummary = Field(default_factory=StyleSummary)
