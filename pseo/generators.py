"""Content generators for programmatic API pages.

Each generator turns a :class:`TemplateContext` into an ordered list of
content nodes. They share no base class; anything that exposes
``generate(ctx) -> list[ContentNode]`` can stand in for one.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Sequence

from .conditions import BlockType, RenderCondition, evaluate_all
from .nodes import CodeBlockNode, ContentNode, HeadingNode, ListNode, ParagraphNode
from .schemas import ApiRecord, FAQCategory, FAQItem, TemplateContext
from .text_utils import extract_base_url, format_number, slugify, valid_url

logger = logging.getLogger(__name__)


class ContentGenerator(Protocol):
    def generate(self, ctx: TemplateContext) -> list[ContentNode]:
        ...


def wrap_in_section(
    title: str, content: Sequence[ContentNode], anchor: str | None = None
) -> list[ContentNode]:
    """Prefix ``content`` with a level-2 heading."""
    return [HeadingNode(level=2, text=title, id=anchor), *content]


def _lines(*parts: Optional[str]) -> str:
    """Join code lines, dropping the ``None`` placeholders of optional lines."""
    return "\n".join(part for part in parts if part is not None)


# ==================== Getting started ====================

AUTH_GUIDES: dict[str, str] = {
    "apiKey": (
        "This API uses API Key authentication. Include your API key in the Authorization "
        "header as a Bearer token. You can obtain your API key by registering on the "
        "provider's website."
    ),
    "OAuth": (
        "This API uses OAuth 2.0 authentication. You'll need to obtain an access token "
        "through the OAuth flow before making API requests. Check the official documentation "
        "for OAuth endpoints and scopes."
    ),
    "X-Mashape-Key": (
        "This API requires a Mashape key. Include your key in the X-Mashape-Key header. "
        "Sign up on RapidAPI to get your key."
    ),
    "User-Agent": (
        "This API requires a User-Agent header in your requests. Make sure to include a "
        "descriptive User-Agent string identifying your application."
    ),
}

# Extra curl header lines for auth schemes that do not stop at a bearer token.
AUTH_EXTRA_HEADERS: dict[str, str] = {
    "X-Mashape-Key": "X-Mashape-Key: YOUR_API_KEY",
    "User-Agent": "User-Agent: your-app-name/1.0",
}


def _bearer_placeholder(auth: str) -> str:
    return "YOUR_ACCESS_TOKEN" if auth == "OAuth" else "YOUR_API_KEY"


# Request target used in examples when the record has no usable link.
BASE_URL_PLACEHOLDER = "YOUR_API_BASE_URL"


def _request_target(api: ApiRecord) -> str:
    return extract_base_url(api.link) or BASE_URL_PLACEHOLDER


class GettingStartedGenerator:
    """Introduction, quick facts and a first curl request."""

    def generate(self, ctx: TemplateContext) -> list[ContentNode]:
        api = ctx.api
        content: list[ContentNode] = [ParagraphNode(text=self._introduction(api))]

        content.append(ListNode(items=self._quick_info(api)))

        content.append(HeadingNode(level=3, text="Quick Start Example", id="quick-start"))
        content.append(CodeBlockNode(language="bash", code=self._quick_start_curl(api)))

        if api.requires_auth:
            content.append(HeadingNode(level=3, text="Authentication", id="authentication"))
            content.append(ParagraphNode(text=self._authentication_guide(api.auth)))

        return content

    @staticmethod
    def _introduction(api: ApiRecord) -> str:
        subject = f"The {api.name} API"
        lead = f"{subject} provides {api.description.rstrip('.')}." if api.description else f"{subject}."
        if api.requires_auth:
            return f"{lead} Authentication via {api.auth} is required to access the API."
        return f"{lead} No authentication required - start using it immediately!"

    @staticmethod
    def _quick_info(api: ApiRecord) -> list[str]:
        base_url = extract_base_url(api.link)
        items = [f"**Base URL**: {base_url}"] if base_url else []
        items += [
            f"**Protocol**: {'HTTPS ✓' if api.https else 'HTTP'}",
            f"**CORS**: {api.cors}",
            f"**Authentication**: {api.auth}",
        ]
        if api.category is not None:
            items.append(f"**Category**: {api.category.name}")
        if api.latency_ms is not None:
            items.append(f"**Average Response Time**: {format_number(api.latency_ms)}ms")
        return items

    @staticmethod
    def _quick_start_curl(api: ApiRecord) -> str:
        headers: list[str] = []
        if api.requires_auth:
            headers.append(f"Authorization: Bearer {_bearer_placeholder(api.auth)}")
            extra = AUTH_EXTRA_HEADERS.get(api.auth)
            if extra:
                headers.append(extra)
        headers.append("Content-Type: application/json")

        parts = [f"curl -X GET '{_request_target(api)}'"]
        parts.extend(f"  -H '{header}'" for header in headers)
        return " \\\n".join(parts)

    @staticmethod
    def _authentication_guide(auth: str) -> str:
        return AUTH_GUIDES.get(
            auth,
            f"This API uses {auth} authentication. Please refer to the official documentation "
            "for detailed authentication instructions.",
        )


# ==================== Code examples ====================


@dataclass(slots=True)
class CodeExample:
    language: str
    code: str
    description: str | None = None
    filename: str | None = None


LANGUAGE_DISPLAY_NAMES: dict[str, str] = {
    "javascript": "JavaScript",
    "typescript": "TypeScript",
    "python": "Python",
    "curl": "cURL",
    "node": "Node.js",
    "nodejs": "Node.js",
    "go": "Go",
    "golang": "Go",
    "rust": "Rust",
    "java": "Java",
    "php": "PHP",
    "ruby": "Ruby",
}

DEFAULT_EXAMPLE_LANGUAGES = ("curl", "javascript", "python")


def _camel_identifier(name: str) -> str:
    return "".join(part.capitalize() for part in slugify(name).split("-")) or "Api"


def _snake_identifier(name: str) -> str:
    return slugify(name).replace("-", "_") or "api"


def _javascript_example(api: ApiRecord, base_url: str, has_auth: bool) -> CodeExample:
    func = f"fetch{_camel_identifier(api.name)}Data"
    code = _lines(
        f"// {api.name} API Example",
        f"const apiUrl = '{base_url}';",
        "const apiKey = 'YOUR_API_KEY';" if has_auth else None,
        "",
        f"async function {func}() {{",
        "  try {",
        "    const response = await fetch(apiUrl, {",
        "      method: 'GET',",
        "      headers: {",
        "        'Authorization': `Bearer ${apiKey}`," if has_auth else None,
        "        'Content-Type': 'application/json',",
        "      },",
        "    });",
        "",
        "    if (!response.ok) {",
        "      throw new Error(`HTTP error! status: ${response.status}`);",
        "    }",
        "",
        "    const data = await response.json();",
        "    console.log('API Response:', data);",
        "    return data;",
        "  } catch (error) {",
        "    console.error('Error calling API:', error);",
        "    throw error;",
        "  }",
        "}",
        "",
        "// Call the function",
        f"{func}();",
    )
    return CodeExample(
        language="javascript",
        code=code,
        description="Example using the Fetch API in JavaScript/TypeScript",
        filename=f"{slugify(api.name) or 'api'}.js",
    )


def _typescript_example(api: ApiRecord, base_url: str, has_auth: bool) -> CodeExample:
    example = _javascript_example(api, base_url, has_auth)
    return CodeExample(
        language="typescript",
        code=example.code,
        description="Example using the Fetch API in TypeScript",
        filename=f"{slugify(api.name) or 'api'}.ts",
    )


def _node_example(api: ApiRecord, base_url: str, has_auth: bool) -> CodeExample:
    func = f"fetch{_camel_identifier(api.name)}Data"
    code = _lines(
        f"// {api.name} API Example with axios",
        "const axios = require('axios');",
        "",
        f"const apiUrl = '{base_url}';",
        "const apiKey = 'YOUR_API_KEY';" if has_auth else None,
        "",
        f"async function {func}() {{",
        "  try {",
        "    const response = await axios.get(apiUrl, {",
        "      headers: {",
        "        'Authorization': `Bearer ${apiKey}`," if has_auth else None,
        "        'Content-Type': 'application/json',",
        "      },",
        "    });",
        "",
        "    console.log('API Response:', response.data);",
        "    return response.data;",
        "  } catch (error) {",
        "    if (error.response) {",
        "      console.error('API Error:', error.response.status, error.response.data);",
        "    } else {",
        "      console.error('Error:', error.message);",
        "    }",
        "    throw error;",
        "  }",
        "}",
        "",
        f"{func}();",
    )
    return CodeExample(
        language="javascript",
        code=code,
        description="Example using axios in Node.js",
        filename=f"{slugify(api.name) or 'api'}.js",
    )


def _python_example(api: ApiRecord, base_url: str, has_auth: bool) -> CodeExample:
    func = f"fetch_{_snake_identifier(api.name)}_data"
    code = _lines(
        f"# {api.name} API Example",
        "import json",
        "",
        "import requests",
        "",
        f"api_url = '{base_url}'",
        "api_key = 'YOUR_API_KEY'" if has_auth else None,
        "",
        "",
        f"def {func}():",
        f'    """Fetch data from {api.name} API"""',
        "    headers = {",
        "        'Authorization': f'Bearer {api_key}'," if has_auth else None,
        "        'Content-Type': 'application/json',",
        "    }",
        "",
        "    try:",
        "        response = requests.get(api_url, headers=headers, timeout=10)",
        "        response.raise_for_status()",
        "        data = response.json()",
        "        print('API Response:', json.dumps(data, indent=2))",
        "        return data",
        "    except requests.exceptions.RequestException as e:",
        "        print(f'Error calling API: {e}')",
        "        raise",
        "",
        "",
        "if __name__ == '__main__':",
        f"    {func}()",
    )
    return CodeExample(
        language="python",
        code=code,
        description="Example using the requests library in Python",
        filename=f"{_snake_identifier(api.name)}.py",
    )


def _go_example(api: ApiRecord, base_url: str, has_auth: bool) -> CodeExample:
    code = _lines(
        f"// {api.name} API Example",
        "package main",
        "",
        "import (",
        '\t"fmt"',
        '\t"io"',
        '\t"net/http"',
        ")",
        "",
        "func main() {",
        f'\treq, err := http.NewRequest("GET", "{base_url}", nil)',
        "\tif err != nil {",
        "\t\tpanic(err)",
        "\t}",
        '\treq.Header.Set("Authorization", "Bearer YOUR_API_KEY")' if has_auth else None,
        '\treq.Header.Set("Content-Type", "application/json")',
        "",
        "\tresp, err := http.DefaultClient.Do(req)",
        "\tif err != nil {",
        "\t\tpanic(err)",
        "\t}",
        "\tdefer resp.Body.Close()",
        "",
        "\tbody, _ := io.ReadAll(resp.Body)",
        '\tfmt.Println("API Response:", string(body))',
        "}",
    )
    return CodeExample(
        language="go",
        code=code,
        description="Example using net/http in Go",
        filename="main.go",
    )


def _ruby_example(api: ApiRecord, base_url: str, has_auth: bool) -> CodeExample:
    code = _lines(
        f"# {api.name} API Example",
        "require 'net/http'",
        "require 'json'",
        "",
        f"uri = URI('{base_url}')",
        "request = Net::HTTP::Get.new(uri)",
        "request['Authorization'] = 'Bearer YOUR_API_KEY'" if has_auth else None,
        "request['Content-Type'] = 'application/json'",
        "",
        "response = Net::HTTP.start(uri.hostname, uri.port, use_ssl: uri.scheme == 'https') do |http|",
        "  http.request(request)",
        "end",
        "",
        "puts JSON.pretty_generate(JSON.parse(response.body))",
    )
    return CodeExample(
        language="ruby",
        code=code,
        description="Example using Net::HTTP in Ruby",
        filename=f"{_snake_identifier(api.name)}.rb",
    )


def _php_example(api: ApiRecord, base_url: str, has_auth: bool) -> CodeExample:
    code = _lines(
        "<?php",
        f"// {api.name} API Example",
        f"$ch = curl_init('{base_url}');",
        "curl_setopt($ch, CURLOPT_RETURNTRANSFER, true);",
        "curl_setopt($ch, CURLOPT_HTTPHEADER, [",
        "    'Authorization: Bearer YOUR_API_KEY'," if has_auth else None,
        "    'Content-Type: application/json',",
        "]);",
        "",
        "$response = curl_exec($ch);",
        "if ($response === false) {",
        "    throw new RuntimeException(curl_error($ch));",
        "}",
        "curl_close($ch);",
        "",
        "print_r(json_decode($response, true));",
    )
    return CodeExample(
        language="php",
        code=code,
        description="Example using the cURL extension in PHP",
        filename=f"{slugify(api.name) or 'api'}.php",
    )


def _java_example(api: ApiRecord, base_url: str, has_auth: bool) -> CodeExample:
    code = _lines(
        f"// {api.name} API Example",
        "import java.net.URI;",
        "import java.net.http.HttpClient;",
        "import java.net.http.HttpRequest;",
        "import java.net.http.HttpResponse;",
        "",
        "public class ApiExample {",
        "    public static void main(String[] args) throws Exception {",
        "        HttpRequest request = HttpRequest.newBuilder()",
        f'            .uri(URI.create("{base_url}"))',
        '            .header("Authorization", "Bearer YOUR_API_KEY")' if has_auth else None,
        '            .header("Content-Type", "application/json")',
        "            .GET()",
        "            .build();",
        "",
        "        HttpResponse<String> response = HttpClient.newHttpClient()",
        "            .send(request, HttpResponse.BodyHandlers.ofString());",
        '        System.out.println("API Response: " + response.body());',
        "    }",
        "}",
    )
    return CodeExample(
        language="java",
        code=code,
        description="Example using java.net.http.HttpClient in Java",
        filename="ApiExample.java",
    )


def _curl_example(api: ApiRecord, base_url: str, has_auth: bool) -> CodeExample:
    code = _lines(
        f"# {api.name} API Example",
        f"curl -X GET '{base_url}' \\",
        "  -H 'Authorization: Bearer YOUR_API_KEY' \\" if has_auth else None,
        "  -H 'Content-Type: application/json'",
    )
    return CodeExample(
        language="bash",
        code=code,
        description="Example using cURL from the command line",
    )


ExampleTemplate = Callable[[ApiRecord, str, bool], CodeExample]

CODE_TEMPLATES: dict[str, ExampleTemplate] = {
    "javascript": _javascript_example,
    "typescript": _typescript_example,
    "node": _node_example,
    "nodejs": _node_example,
    "python": _python_example,
    "go": _go_example,
    "golang": _go_example,
    "ruby": _ruby_example,
    "php": _php_example,
    "java": _java_example,
    "curl": _curl_example,
}


def language_display_name(lang: str) -> str:
    key = lang.lower()
    if key in LANGUAGE_DISPLAY_NAMES:
        return LANGUAGE_DISPLAY_NAMES[key]
    return lang[:1].upper() + lang[1:]


class CodeExamplesGenerator:
    """One heading and request snippet per documented language."""

    def generate(self, ctx: TemplateContext) -> list[ContentNode]:
        api = ctx.api
        content: list[ContentNode] = [
            ParagraphNode(
                text=f"Here are code examples for calling the {api.name} API in different programming languages:"
            )
        ]

        for lang in self.languages(api):
            example = self.example_for(api, lang)
            content.append(
                HeadingNode(
                    level=3,
                    text=language_display_name(lang),
                    id=f"example-{slugify(lang) or 'code'}",
                )
            )
            content.append(
                CodeBlockNode(
                    language=example.language,
                    code=example.code,
                    filename=example.filename,
                )
            )
            if example.description:
                content.append(ParagraphNode(text=example.description, class_name="code-caption"))

        return content

    @staticmethod
    def languages(api: ApiRecord) -> list[str]:
        """Documented languages in record order, else the default set."""
        metadata = api.seo_metadata
        documented = metadata.language_names() if metadata else []
        seen: list[str] = []
        for name in documented:
            key = name.strip().lower()
            if key and key not in seen:
                seen.append(key)
        return seen or list(DEFAULT_EXAMPLE_LANGUAGES)

    @staticmethod
    def example_for(api: ApiRecord, lang: str) -> CodeExample:
        template = CODE_TEMPLATES.get(lang.lower())
        if template is None:
            logger.debug("No code template for %s; using cURL", lang)
            template = _curl_example
        return template(api, _request_target(api), api.requires_auth)


# ==================== FAQ ====================

FAQ_CATEGORY_ORDER: tuple[FAQCategory, ...] = (
    "technical",
    "security",
    "support",
    "pricing",
    "general",
)

FAQ_CATEGORY_TITLES: dict[str, str] = {
    "technical": "Technical Questions",
    "security": "Security & Privacy",
    "support": "Support & Documentation",
    "pricing": "Pricing & Plans",
    "general": "General Questions",
}

AUTH_FAQ_DETAILS: dict[str, str] = {
    "apiKey": (
        "You'll need to obtain an API key by registering on the provider's website. Include "
        "the key in the Authorization header as a Bearer token."
    ),
    "OAuth": (
        "The API uses OAuth 2.0 authentication. You'll need to implement the OAuth flow to "
        "obtain an access token before making API requests."
    ),
    "X-Mashape-Key": (
        "This API requires a Mashape/RapidAPI key. Sign up on RapidAPI and include the key in "
        "the X-Mashape-Key header."
    ),
    "User-Agent": (
        "Make sure to include a descriptive User-Agent header in all your requests to identify "
        "your application."
    ),
}

DOC_QUALITY_FAQ_THRESHOLD = 6
DOC_QUALITY_COMPREHENSIVE = 8
USE_CASES_IN_FAQ = 3


def _auth_faq(ctx: TemplateContext) -> FAQItem:
    api = ctx.api
    if api.requires_auth:
        detail = AUTH_FAQ_DETAILS.get(
            api.auth, "Please refer to the official documentation for authentication details."
        )
        return FAQItem(
            question=f"How do I authenticate with the {api.name} API?",
            answer=f"The {api.name} API uses {api.auth} authentication. {detail}",
            category="technical",
            keywords=["authentication", "auth", api.auth.lower()],
        )
    return FAQItem(
        question=f"Does the {api.name} API require authentication?",
        answer=(
            f"No, the {api.name} API is publicly accessible without authentication. You can "
            "start making requests immediately without any API keys or tokens."
        ),
        category="technical",
        keywords=["authentication", "no auth", "public api"],
    )


def _cors_faq(ctx: TemplateContext) -> FAQItem:
    name = ctx.api.name
    return FAQItem(
        question=f"Can I use the {name} API from a web browser?",
        answer=(
            f"Yes! The {name} API supports CORS (Cross-Origin Resource Sharing), which means you "
            "can make requests directly from web browsers without encountering CORS errors."
        ),
        category="technical",
        keywords=["cors", "browser", "client-side"],
    )


def _https_faq(ctx: TemplateContext) -> FAQItem:
    name = ctx.api.name
    if ctx.api.https:
        answer = (
            f"Yes, the {name} API uses HTTPS encryption to secure all data in transit. All API "
            "requests and responses are encrypted."
        )
    else:
        answer = (
            f"The {name} API uses HTTP. For production use, consider using HTTPS endpoints if "
            "available, or implement additional security measures."
        )
    return FAQItem(
        question=f"Is the {name} API secure?",
        answer=answer,
        category="security",
        keywords=["https", "ssl", "security", "encryption"],
    )


def _latency_faq(ctx: TemplateContext) -> FAQItem:
    api = ctx.api
    latency = api.latency_ms or 0
    if latency < 500:
        verdict = "This is excellent performance, suitable for real-time applications."
    elif latency < 1000:
        verdict = "This is good performance for most use cases."
    else:
        verdict = "Consider implementing caching or CDN for better user experience."
    return FAQItem(
        question=f"What is the typical response time for the {api.name} API?",
        answer=(
            f"Based on our monitoring, the {api.name} API typically responds in "
            f"{format_number(latency)}ms. {verdict}"
        ),
        category="technical",
        keywords=["performance", "latency", "speed"],
    )


def _uptime_faq(ctx: TemplateContext) -> FAQItem:
    name = ctx.api.name
    uptime = (ctx.health_summary.uptime_pct if ctx.health_summary else None) or 0
    if uptime >= 99:
        verdict = "This is excellent reliability."
    elif uptime >= 95:
        verdict = "This is good reliability for most use cases."
    else:
        verdict = "You may want to implement retry logic and error handling."
    return FAQItem(
        question=f"How reliable is the {name} API?",
        answer=f"Over the last 30 days, the {name} API has maintained {uptime:.2f}% uptime. {verdict}",
        category="support",
        keywords=["uptime", "reliability", "sla"],
    )


def _documentation_faq(ctx: TemplateContext) -> FAQItem | None:
    api = ctx.api
    metadata = api.seo_metadata
    score = metadata.doc_quality_score if metadata else None
    if metadata is None or score is None or score < DOC_QUALITY_FAQ_THRESHOLD:
        return None

    depth = "comprehensive" if score >= DOC_QUALITY_COMPREHENSIVE else "detailed"
    coverage = (
        "The documentation includes code examples"
        if metadata.has_code_examples
        else "The documentation covers all endpoints"
    )
    languages = metadata.language_names()
    tail = f" with examples in {', '.join(languages)}." if languages else "."
    link = valid_url(api.link)
    location = f"available at {link}" if link else "available from the provider"
    return FAQItem(
        question=f"Where can I find the {api.name} API documentation?",
        answer=f"The {api.name} API has {depth} documentation {location}. {coverage}{tail}",
        category="support",
        keywords=["documentation", "docs", "guide"],
    )


def _openapi_faq(ctx: TemplateContext) -> FAQItem:
    api = ctx.api
    return FAQItem(
        question=f"Does the {api.name} API have an OpenAPI/Swagger specification?",
        answer=(
            f"Yes, the {api.name} API provides an OpenAPI specification at {api.openapi_url}. "
            "You can use this to auto-generate client SDKs, test the API interactively, or "
            "integrate with API development tools."
        ),
        category="technical",
        keywords=["openapi", "swagger", "specification"],
    )


def _use_cases_faq(ctx: TemplateContext) -> FAQItem | None:
    api = ctx.api
    analysis = api.ai_analysis
    tags = analysis.tags()[:USE_CASES_IN_FAQ] if analysis else []
    if not tags:
        return None
    summary = (analysis.summary or "").strip()
    answer = f"The {api.name} API is commonly used for: {', '.join(tags)}."
    if summary:
        answer = f"{answer} {summary}"
    return FAQItem(
        question=f"What can I build with the {api.name} API?",
        answer=answer,
        category="general",
        keywords=["use cases", "examples", "applications"],
    )


def _rate_limit_faq(ctx: TemplateContext) -> FAQItem:
    name = ctx.api.name
    return FAQItem(
        question=f"Are there rate limits for the {name} API?",
        answer=(
            "Rate limits vary depending on your usage tier and authentication method. Please "
            f"refer to the official {name} API documentation for specific rate limit details "
            "and best practices for handling rate limit errors."
        ),
        category="technical",
        keywords=["rate limit", "throttling", "quota"],
    )


def _pricing_faq(ctx: TemplateContext) -> FAQItem:
    api = ctx.api
    if api.requires_auth:
        link = valid_url(api.link)
        where = f"visit {link}" if link else "check the provider's website"
        answer = (
            f"The {api.name} API requires authentication, which typically indicates paid or "
            f"tiered access. Please {where} for detailed pricing information."
        )
    else:
        answer = (
            f"The {api.name} API appears to be publicly accessible. However, please check the "
            "official documentation for any usage limits, terms of service, or commercial "
            "licensing requirements."
        )
    return FAQItem(
        question=f"Is the {api.name} API free to use?",
        answer=answer,
        category="pricing",
        keywords=["pricing", "cost", "free", "paid"],
    )


@dataclass(frozen=True, slots=True)
class FAQRule:
    """An FAQ entry that is built only when all ``conditions`` hold."""

    conditions: tuple[RenderCondition, ...]
    build: Callable[[TemplateContext], Optional[FAQItem]]


FAQ_RULES: tuple[FAQRule, ...] = (
    FAQRule((), _auth_faq),
    FAQRule((RenderCondition(field="api.cors", operator="equals", value="Yes"),), _cors_faq),
    FAQRule((), _https_faq),
    FAQRule((RenderCondition(field="api.latency_ms", operator="exists"),), _latency_faq),
    FAQRule(
        (RenderCondition(field="health_summary.uptime_pct", operator="exists"),),
        _uptime_faq,
    ),
    FAQRule(
        (RenderCondition(field="api.seo_metadata.doc_quality_score", operator="exists"),),
        _documentation_faq,
    ),
    FAQRule((RenderCondition(field="api.openapi_url", operator="exists"),), _openapi_faq),
    FAQRule(
        (RenderCondition(field="api.ai_analysis.use_cases.length", operator="gt", value=0),),
        _use_cases_faq,
    ),
    FAQRule((), _rate_limit_faq),
    FAQRule((), _pricing_faq),
)


class FAQGenerator:
    """Category-grouped questions: level-3 category, level-4 question, answer paragraph."""

    def generate(self, ctx: TemplateContext) -> list[ContentNode]:
        content: list[ContentNode] = [
            ParagraphNode(text=f"Frequently asked questions about the {ctx.api.name} API:")
        ]

        grouped: dict[str, list[FAQItem]] = {category: [] for category in FAQ_CATEGORY_ORDER}
        for item in self.items(ctx):
            grouped[item.category].append(item)

        for category in FAQ_CATEGORY_ORDER:
            items = grouped[category]
            if not items:
                continue
            content.append(
                HeadingNode(level=3, text=FAQ_CATEGORY_TITLES[category], id=f"faq-{category}")
            )
            for item in items:
                content.append(HeadingNode(level=4, text=item.question))
                content.append(ParagraphNode(text=item.answer))

        return content

    @staticmethod
    def items(ctx: TemplateContext) -> list[FAQItem]:
        items: list[FAQItem] = []
        for rule in FAQ_RULES:
            if not evaluate_all(rule.conditions, ctx):
                continue
            item = rule.build(ctx)
            if item is not None:
                items.append(item)
        return items


CONTENT_GENERATORS: dict[BlockType, type] = {
    BlockType.GETTING_STARTED: GettingStartedGenerator,
    BlockType.CODE_EXAMPLES: CodeExamplesGenerator,
    BlockType.FAQ: FAQGenerator,
}
