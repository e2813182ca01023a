from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from widgetforge.core.errors import PersistenceError, UnexpectedError, ValidationError, WidgetForgeError

from .generator import generate_artifact
from .persistence import CancelledByOperator, Failed, PersistenceCoordinator, PersistenceOutcome, Saved
from .request import WidgetRequest
from .styles import check_style_references, parse_style_variables
from .validator import validate_request

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompileResult:
    """
    Result of one compile call.

    `status` is the single line handed back to the agent; `outcome`, `error`
    and `artifact` are for programmatic callers.
    """

    status: str
    outcome: Optional[PersistenceOutcome] = None
    error: Optional[WidgetForgeError] = None
    artifact: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class WidgetCompiler:
    """
    Validate -> parse styles -> generate -> persist, mapped to one status line.

    Holds no per-request state, so concurrent compile() calls are independent.
    """

    def __init__(self, coordinator: PersistenceCoordinator, *, strict_styles: bool = False, dry_run: bool = False):
        self._coordinator = coordinator
        self._strict_styles = strict_styles
        self._dry_run = dry_run

    @property
    def coordinator(self) -> PersistenceCoordinator:
        return self._coordinator

    async def compile(self, request: WidgetRequest, *, dry_run: bool = False) -> CompileResult:
        """
        `dry_run` applies to this call only; a compiler built with dry_run=True
        never writes.
        """
        try:
            return await self._compile(request, self._dry_run or dry_run)
        except WidgetForgeError as e:
            logger.error("Widget compile failed: %s", e)
            return CompileResult(status=f"Unexpected error: {e.message}", error=e)
        except Exception as e:  # noqa: BLE001
            logger.exception("Unexpected error while compiling widget")
            err = UnexpectedError(code="unexpected", message=str(e) or repr(e), data={"type": type(e).__name__})
            return CompileResult(status=f"Unexpected error: {err.message}", error=err)

    async def _compile(self, request: WidgetRequest, dry_run: bool) -> CompileResult:
        try:
            validate_request(request)
            parsed = parse_style_variables(request.style_variables_raw)
            if self._strict_styles:
                check_style_references(request.markup, parsed.styles)
        except ValidationError as e:
            logger.info("Widget request rejected: %s", e)
            return CompileResult(status=f"Widget generation failed: {e.message}", error=e)

        logger.debug(
            "Compiling widget: command=%r refresh=%sms styles=%d",
            request.command,
            request.refresh_interval_ms,
            len(parsed.styles),
        )
        artifact = generate_artifact(request, parsed.styles)

        if dry_run:
            preview = self._coordinator.preview(artifact)
            return CompileResult(
                status=f"Widget script generated (dry run, would save to {preview['path']})",
                artifact=artifact,
            )

        outcome = await self._coordinator.persist(artifact)
        return self._result_for(outcome, artifact)

    @staticmethod
    def _result_for(outcome: PersistenceOutcome, artifact: str) -> CompileResult:
        if isinstance(outcome, Saved):
            return CompileResult(
                status=f"Widget script generated and saved to {outcome.path}",
                outcome=outcome,
                artifact=artifact,
            )
        if isinstance(outcome, CancelledByOperator):
            err = PersistenceError(code="persistence.fallback_cancelled", message="File save operation cancelled by user")
            return CompileResult(
                status="Widget script generated but not saved: save cancelled by operator",
                outcome=outcome,
                error=err,
                artifact=artifact,
            )
        if isinstance(outcome, Failed):
            err = PersistenceError(code=outcome.code, message=outcome.reason)
            return CompileResult(
                status=f"Widget script generated but could not be saved: {outcome.reason}",
                outcome=outcome,
                error=err,
                artifact=artifact,
            )
        raise TypeError(f"Unknown persistence outcome: {outcome!r}")

    async def run_tool(self, args: Dict[str, Any], dry_run: bool = False) -> str:
        """
        Tool handler: structured arguments in, status string out.
        """
        result = await self.compile(WidgetRequest.from_args(args), dry_run=dry_run)
        return result.status
