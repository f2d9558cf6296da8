"""
Style Analyzer
页面样式分析器

功能：
- 在无头 Chromium 中渲染抓取到的 HTML（注入 <base>，相对样式表可加载）
- 找到正文容器（按优先级匹配选择器）
- 读取段落、标题、按钮、输入框、链接的计算样式
- 汇总为 StyleSummary
"""

import logging
from typing import Dict, List, Optional, Protocol, Tuple

from bs4 import BeautifulSoup
from playwright.async_api import async_playwright

from .models import StyleSummary

logger = logging.getLogger(__name__)

# Raw computed styles per sampled element; None when the element is absent
StyleSamples = Dict[str, Optional[Dict[str, str]]]


# ==================== Sampling Rules ====================

# First match wins
CONTAINER_SELECTORS = [
    "article",
    "main",
    '[role="main"]',
    ".post-content",
    ".entry-content",
    ".article-content",
    ".post",
    ".content",
    "#content",
    "body",
]

SAMPLE_SELECTORS = {
    "paragraph": "p",
    "heading": "h1, h2, h3",
    "button": 'button, input[type="submit"], input[type="button"], .btn, .button',
    "input": 'input:not([type="submit"]):not([type="button"]):not([type="hidden"]), textarea, select',
    "link": "a[href]",
}

# category -> summary field -> (sample, CSS property)
STYLE_FIELDS: Dict[str, Dict[str, Tuple[str, str]]] = {
    "typography": {
        "fontFamily": ("paragraph", "font-family"),
        "fontSize": ("paragraph", "font-size"),
        "lineHeight": ("paragraph", "line-height"),
        "fontWeight": ("paragraph", "font-weight"),
        "headingFontFamily": ("heading", "font-family"),
        "headingFontWeight": ("heading", "font-weight"),
        "headingColor": ("heading", "color"),
    },
    "colors": {
        "text": ("paragraph", "color"),
        "background": ("container", "background-color"),
        "link": ("link", "color"),
    },
    "spacing": {
        "paragraphMargin": ("paragraph", "margin-bottom"),
        "containerPadding": ("container", "padding"),
        "containerMaxWidth": ("container", "max-width"),
    },
    "components": {
        "buttonBackground": ("button", "background-color"),
        "buttonColor": ("button", "color"),
        "buttonBorderRadius": ("button", "border-radius"),
        "buttonPadding": ("button", "padding"),
        "buttonBorder": ("button", "border"),
        "inputBorder": ("input", "border"),
        "inputBorderRadius": ("input", "border-radius"),
        "inputPadding": ("input", "padding"),
        "inputBackground": ("input", "background-color"),
        "linkTextDecoration": ("link", "text-decoration-line"),
    },
}


def tracked_properties() -> List[str]:
    """Every CSS property read from the page"""
    return sorted({prop for fields in STYLE_FIELDS.values() for _, prop in fields.values()})


STYLE_PROBE_SCRIPT = """
({ containerSelectors, sampleSelectors, properties }) => {
    const container = containerSelectors
        .map((selector) => document.querySelector(selector))
        .find(Boolean) || document.body;

    const pick = (selector) =>
        (container && container.querySelector(selector)) || document.querySelector(selector);

    const read = (el) => {
        if (!el) return null;
        const computed = window.getComputedStyle(el);
        const values = {};
        for (const prop of properties) {
            values[prop] = computed.getPropertyValue(prop) || '';
        }
        return values;
    };

    const samples = { container: read(container) };
    for (const [name, selector] of Object.entries(sampleSelectors)) {
        samples[name] = read(pick(selector));
    }
    return samples;
}
"""


def build_style_summary(samples: StyleSamples) -> StyleSummary:
    """Map raw computed styles onto the summary; missing values become "" """
    data: Dict[str, Dict[str, str]] = {}
    for category, fields in STYLE_FIELDS.items():
        data[category] = {}
        for field_name, (sample, prop) in fields.items():
            values = samples.get(sample) or {}
            data[category][field_name] = (values.get(prop) or "").strip()
    return StyleSummary.model_validate(data)


def with_base_href(html: str, url: str) -> str:
    """Insert <base href> so relative stylesheets resolve against the page URL"""
    soup = BeautifulSoup(html, "lxml")
    if soup.find("base") is not None:
        return str(soup)

    base = soup.new_tag("base", href=url)
    if soup.head is None:
        head = soup.new_tag("head")
        (soup.html or soup).insert(0, head)
    soup.head.insert(0, base)
    return str(soup)


# ==================== Readers ====================

class StyleReader(Protocol):
    """Reads computed styles of the sampled elements"""

    async def read(self, html: str, url: str) -> StyleSamples:
        ...


class PlaywrightStyleReader:
    """
    Renders the page in headless Chromium and evaluates getComputedStyle.

    A browser is launched per call and closed afterwards.
    """

    def __init__(self, timeout_ms: int = 15000):
        self.timeout_ms = timeout_ms

    async def read(self, html: str, url: str) -> StyleSamples:
        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=True)
            try:
                page = await browser.new_page()
                await page.set_content(
                    with_base_href(html, url),
                    timeout=self.timeout_ms,
                    wait_until="load",
                )
                return await page.evaluate(
                    STYLE_PROBE_SCRIPT,
                    {
                        "containerSelectors": CONTAINER_SELECTORS,
                        "sampleSelectors": SAMPLE_SELECTORS,
                        "properties": tracked_properties(),
                    },
                )
            finally:
                await browser.close()


class StyleAnalyzer:
    """
    Builds the StyleSummary of a fetched page.

    Style analysis never fails an extraction: reader errors are logged
    and an all-empty summary is returned.
    """

    def __init__(self, reader: StyleReader):
        self.reader = reader

    async def analyze(self, html: str, url: str) -> StyleSummary:
        try:
            samples = await self.reader.read(html, url)
        except Exception as e:
            logger.warning(f"[StyleAnalyzer] Computed style read failed for {url[:80]}: {e}")
            return StyleSummary()

        found = [name for name, values in samples.items() if values]
        logger.info(f"[StyleAnalyzer] Sampled elements: {', '.join(found) or 'none'}")
        return build_style_summary(samples)
