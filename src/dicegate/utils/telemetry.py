"""OpenTelemetry tracing for dicegate.

Code paths call :func:`get_tracer` unconditionally.  Until
:func:`configure_telemetry` installs an SDK provider the API hands out
no-op spans, so tracing costs nothing when it is switched off.

Span attribute keys live here so every layer tags spans the same way.
The SDK and exporters ship in the ``otel`` extra (``pip install dicegate[otel]``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from opentelemetry import trace

if TYPE_CHECKING:
    from dicegate.config.models import TelemetrySettings

ATTR_METHOD = "dicegate.rpc.method"
ATTR_REQUEST_ID = "dicegate.rpc.id"
ATTR_ERROR_CODE = "dicegate.rpc.error_code"
ATTR_TOOL_NAME = "dicegate.tool.name"
ATTR_CALLER = "dicegate.caller"
ATTR_ADMISSION_ALLOWED = "dicegate.admission.allowed"
ATTR_ADMISSION_REMAINING = "dicegate.admission.remaining"

_INSTRUMENTATION_NAME = "dicegate"

_SDK_HINT = "Install it with: pip install dicegate[otel]"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Tracer for *name*, falling back to the ``dicegate`` instrumentation scope."""
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(
    *,
    service_name: str = "dicegate",
    export_to_console: bool = False,
    otlp_endpoint: str | None = None,
) -> None:
    """Install a global SDK tracer provider for *service_name*.

    Console export writes spans as JSON to stdout, so it must stay off when
    serving over stdio.  *otlp_endpoint* enables batched OTLP/gRPC export.

    Raises:
        ImportError: If ``opentelemetry-sdk`` (or, for OTLP, the exporter
            package) is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
    except ImportError as exc:
        msg = f"opentelemetry-sdk is required for configure_telemetry(). {_SDK_HINT}"
        raise ImportError(msg) from exc

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    for processor in _span_processors(export_to_console, otlp_endpoint):
        provider.add_span_processor(processor)
    trace.set_tracer_provider(provider)


def configure_from_settings(settings: TelemetrySettings, *, service_name: str) -> bool:
    """Apply *settings*; return whether a provider was installed."""
    if not settings.enabled:
        return False
    configure_telemetry(
        service_name=service_name,
        export_to_console=settings.console,
        otlp_endpoint=settings.otlp_endpoint,
    )
    return True


def _span_processors(export_to_console: bool, otlp_endpoint: str | None) -> list[Any]:
    from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
        BatchSpanProcessor,
        ConsoleSpanExporter,
        SimpleSpanProcessor,
    )

    processors: list[Any] = []
    if export_to_console:
        processors.append(SimpleSpanProcessor(ConsoleSpanExporter()))
    if otlp_endpoint:
        try:
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (  # pyright: ignore[reportMissingImports]
                OTLPSpanExporter,
            )
        except ImportError as exc:
            msg = f"opentelemetry-exporter-otlp is required for OTLP export. {_SDK_HINT}"
            raise ImportError(msg) from exc
        processors.append(BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint)))
    return processors
