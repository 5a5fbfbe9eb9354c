"""
OpenTelemetry wiring for the API process.

Spans are exported to OTEL_EXPORTER_OTLP_ENDPOINT and/or the console when
configured. With neither, spans are still recorded and sampled but dropped.
"""

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter, SpanExporter
from opentelemetry.sdk.trace.sampling import ParentBased, Sampler, TraceIdRatioBased
from sqlalchemy.ext.asyncio import AsyncEngine

from tikiti.platform.config.core_setting import settings
from tikiti.platform.logging.loguru_io import Logger


# Liveness checks and Prometheus scrapes
UNTRACED_URLS = 'health,metrics'


def build_exporters() -> list[SpanExporter]:
    exporters: list[SpanExporter] = []
    if settings.OTEL_EXPORTER_OTLP_ENDPOINT:
        exporters.append(OTLPSpanExporter(endpoint=settings.OTEL_EXPORTER_OTLP_ENDPOINT))
    if settings.OTEL_CONSOLE_EXPORT:
        exporters.append(ConsoleSpanExporter())
    return exporters


def build_sampler() -> Sampler:
    """Follows the caller's sampling decision; samples root spans at TRACE_SAMPLE_RATIO"""
    ratio = min(max(settings.TRACE_SAMPLE_RATIO, 0.0), 1.0)
    return ParentBased(root=TraceIdRatioBased(ratio))


class TracingConfig:
    def __init__(self, *, service_name: str) -> None:
        self.service_name = service_name
        self._provider: TracerProvider | None = None

    def setup(self) -> None:
        """Installs the global tracer provider; call once per process"""
        provider = TracerProvider(
            resource=Resource.create(
                {SERVICE_NAME: self.service_name, SERVICE_VERSION: settings.VERSION}
            ),
            sampler=build_sampler(),
        )
        exporters = build_exporters()
        for exporter in exporters:
            provider.add_span_processor(BatchSpanProcessor(exporter))
        trace.set_tracer_provider(provider)
        self._provider = provider
        Logger.base.info(
            f'📊 [TRACING] {self.service_name}: {len(exporters)} exporter(s), '
            f'sample ratio {settings.TRACE_SAMPLE_RATIO}'
        )

    def instrument_fastapi(self, *, app: FastAPI) -> None:
        FastAPIInstrumentor.instrument_app(app, excluded_urls=UNTRACED_URLS)

    def instrument_sqlalchemy(self, *, engine: AsyncEngine) -> None:
        SQLAlchemyInstrumentor().instrument(
            engine=engine.sync_engine, tracer_provider=self._provider
        )

    def shutdown(self) -> None:
        if self._provider is not None:
            self._provider.shutdown()
            self._provider = None
