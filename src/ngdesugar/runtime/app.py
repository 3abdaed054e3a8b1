"""Web form for trying out structural directive bindings."""

import logging
import os
from typing import Any, Dict
from urllib.parse import quote

from jinja2 import Environment, PackageLoader, select_autoescape
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse
from starlette.routing import Route
from starlette.templating import Jinja2Templates
from starlette.types import Receive, Scope, Send

from ngdesugar.compiler.ast_nodes import GenerationResult
from ngdesugar.compiler.codegen.generator import CodeGenerator
from ngdesugar.compiler.exceptions import InvalidDirectiveNameError

logger = logging.getLogger(__name__)

# Query string parameter names, shared with the form fields.
QUERY_PARAMS = ("tagName", "directive", "binding")

# Characters encodeURIComponent leaves as they are.
URI_COMPONENT_SAFE = "!~*'()"


def build_query(tag_name: str, directive: str, binding: str) -> str:
    """Build the bookmarkable query string for a set of inputs."""
    values = (tag_name, directive, binding)
    return "&".join(
        f"{name}={quote(value, safe=URI_COMPONENT_SAFE)}"
        for name, value in zip(QUERY_PARAMS, values)
    )


class DesugarApp:
    """ASGI application serving the binding form and a JSON endpoint."""

    def __init__(
        self,
        debug: bool = False,
        default_tag_name: str = "div",
        default_directive: str = "ngFor",
        default_binding: str = "let item of items; index as i",
    ) -> None:
        self.debug = debug
        self.default_tag_name = default_tag_name
        self.default_directive = default_directive
        self.default_binding = default_binding
        self.generator = CodeGenerator()
        self.templates = Jinja2Templates(
            env=Environment(
                loader=PackageLoader("ngdesugar.runtime", "templates"),
                autoescape=select_autoescape(["html", "xml"]),
            )
        )

        self.app = Starlette(
            debug=debug,
            routes=[
                Route("/", self.index, methods=["GET"]),
                Route("/api/render", self.api_render, methods=["GET"]),
            ],
        )
        self.app.state.ngdesugar = self

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self.app(scope, receive, send)

    def _read_inputs(self, request: Request) -> Dict[str, str]:
        params = request.query_params
        return {
            "tag_name": params.get("tagName", self.default_tag_name),
            "directive": params.get("directive", self.default_directive),
            "binding": params.get("binding", self.default_binding),
        }

    def _generate(self, inputs: Dict[str, str]) -> GenerationResult:
        return self.generator.generate(
            inputs["tag_name"], inputs["directive"], inputs["binding"]
        )

    async def index(self, request: Request) -> HTMLResponse:
        inputs = self._read_inputs(request)
        try:
            result = self._generate(inputs)
        except InvalidDirectiveNameError as e:
            logger.debug("Rejected directive name: %s", e)
            result = GenerationResult(errors=str(e), warnings="", skeleton="", source="")

        context: Dict[str, Any] = dict(inputs)
        context["result"] = result
        context["action"] = request.url.path
        context["query"] = build_query(
            inputs["tag_name"], inputs["directive"], inputs["binding"]
        )
        return self.templates.TemplateResponse(request, "index.html", context)

    async def api_render(self, request: Request) -> JSONResponse:
        inputs = self._read_inputs(request)
        try:
            result = self._generate(inputs)
        except InvalidDirectiveNameError as e:
            return JSONResponse({"detail": str(e)}, status_code=400)

        return JSONResponse(
            {
                "errors": result.errors,
                "warnings": result.warnings,
                "skeleton": result.skeleton,
                "source": result.source,
                "query": build_query(
                    inputs["tag_name"], inputs["directive"], inputs["binding"]
                ),
            }
        )


def create_app() -> DesugarApp:
    """Factory used by ``ngdesugar serve``; reads settings from the environment."""
    return DesugarApp(debug=os.environ.get("NGDESUGAR_DEBUG", "") == "1")
