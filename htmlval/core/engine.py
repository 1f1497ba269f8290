"""
Engine — Pipeline orchestration.

The engine selects a pipeline, runs passes in order,
turns pass failures into the terminal parse-error diagnostic,
and packages output.

The engine is NOT where rule logic lives.
"""

from dataclasses import dataclass
from typing import Optional

from htmlval.core.context import ValidationContext, ValidationRequest
from htmlval.core.contracts import Pass
from htmlval.core.logging import ValidationLogger
from htmlval.ir.enums import RuleId, ValidationStatus
from htmlval.ir.schema import ValidationResult
from htmlval.rules.models import RuleTables


@dataclass
class Pipeline:
    """A named sequence of passes."""

    id: str
    name: str
    passes: list[Pass]


class PipelineNotFoundError(KeyError):
    """No pipeline is registered under the requested ID."""


class Engine:
    """
    Pipeline orchestrator.

    Runs passes in order, handles errors, and packages results.
    """

    def __init__(self) -> None:
        self._pipelines: dict[str, Pipeline] = {}

    def register_pipeline(self, pipeline: Pipeline) -> None:
        """Register a pipeline by ID."""
        self._pipelines[pipeline.id] = pipeline

    def list_pipelines(self) -> list[str]:
        """List registered pipeline IDs."""
        return list(self._pipelines.keys())

    def validate(
        self,
        request: ValidationRequest,
        pipeline_id: Optional[str] = None,
        rules: Optional[RuleTables] = None,
    ) -> ValidationResult:
        """
        Run a validation.

        Args:
            request: The validation request
            pipeline_id: Which pipeline to use (default: 'default')
            rules: Rule tables to check against (default: the html5 ruleset)

        Returns:
            ValidationResult with errors, warnings and trace

        Raises:
            PipelineNotFoundError: If pipeline_id is not registered
        """
        pipeline_id = pipeline_id or "default"
        if pipeline_id not in self._pipelines:
            raise PipelineNotFoundError(f"Pipeline '{pipeline_id}' not registered")

        pipeline = self._pipelines[pipeline_id]
        ctx = ValidationContext.from_request(request, rules=rules)

        vlog = ValidationLogger(request.request_id)

        passes = pipeline.passes
        try:
            ctx.ensure_rules()
        except Exception as e:
            _record_failure(ctx, vlog, "load_rules", e)
            passes = []

        # Run passes in order
        for pass_fn in passes:
            pass_name = pass_fn.__name__
            errors_before = len(ctx.errors)
            warnings_before = len(ctx.warnings)
            try:
                vlog.pass_start(pass_name)
                ctx = pass_fn(ctx)
                vlog.pass_end(
                    pass_name,
                    errors=len(ctx.errors) - errors_before,
                    warnings=len(ctx.warnings) - warnings_before,
                )
            except Exception as e:
                _record_failure(ctx, vlog, pass_name, e)
                break

        result = ctx.to_result()

        vlog.validation_complete(
            status=result.status.value,
            errors=len(result.errors),
            warnings=len(result.warnings),
        )

        return result


def _record_failure(
    ctx: ValidationContext, vlog: ValidationLogger, step: str, error: Exception
) -> None:
    """Turn a failed step into the terminal parse-error."""
    vlog.pass_error(step, error)
    ctx.status = ValidationStatus.ERROR
    ctx.add_diagnostic(RuleId.PARSE_ERROR, f"Parse error: {error}")
    ctx.add_trace(
        pass_name=step,
        action="error",
        after=type(error).__name__,
    )


# Global engine instance
_engine: Optional[Engine] = None


def get_engine() -> Engine:
    """Get or create the global engine instance with the default pipeline."""
    global _engine
    if _engine is None:
        from htmlval.passes import default_pipeline

        _engine = Engine()
        _engine.register_pipeline(default_pipeline())
    return _engine


def validate(
    text: str,
    source: Optional[str] = None,
    rules: Optional[RuleTables] = None,
    pipeline_id: Optional[str] = None,
) -> ValidationResult:
    """
    Convenience function for simple validations.

    Args:
        text: Raw markup
        source: File name or label carried into the result
        rules: Rule tables (default: the html5 ruleset)
        pipeline_id: Which pipeline to use

    Returns:
        ValidationResult
    """
    engine = get_engine()
    request = ValidationRequest(text=text, source=source)
    return engine.validate(request, pipeline_id, rules=rules)
