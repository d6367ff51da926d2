from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import date
from enum import Enum
from typing import Optional

import typer
from typing_extensions import Annotated

from .api import CrptClient
from ..core.domain.enums import WindowUnit
from ..core.domain.errors import ConfigurationError, CrptClientError
from ..core.domain.models import Document, Product
from ..infra.document_serializer import JsonDocumentSerializer


app = typer.Typer(add_completion=False, help="CRPT document API client")


class LogLevel(str, Enum):
    OFF = "OFF"
    CRITICAL = "CRITICAL"
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"
    DEBUG = "DEBUG"


@app.callback()
def main(
    log_level: Annotated[
        Optional[LogLevel],
        typer.Option(
            "--log-level",
            help="Set log level (OFF, CRITICAL, ERROR, WARNING, INFO, DEBUG). Default: OFF",
        ),
    ] = None,
) -> None:
    """Root command callback to configure logging if requested."""
    if log_level in (None, LogLevel.OFF):
        return

    level = logging.getLevelName(log_level.value)
    if __package__:
        package_name = __package__.split(".", 1)[0]
    else:
        package_name = "crpt_client"
    logger = logging.getLogger(package_name)

    # Avoid stacking handlers when the callback runs more than once in a process
    has_stream = any(isinstance(h, logging.StreamHandler) for h in logger.handlers)
    if not has_stream:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s | %(name)s | %(message)s"))
        logger.addHandler(handler)

    logger.propagate = False
    logger.setLevel(level)


def build_sample_document(today: date | None = None) -> Document:
    """The document the demo sends: every field filled with a placeholder."""
    today = today or date.today()
    product = Product(
        certificate_document="certificateDocument",
        certificate_document_date=today,
        certificate_document_number="certificateDocumentNumber",
        owner_inn="ownerInn",
        producer_inn="producerInn",
        production_date=today,
        tnved_code="tnvedCode",
        uit_code="uitCode",
        uitu_code="uituCode",
    )
    return Document(
        description="description",
        doc_id="docId",
        doc_status="docStatus",
        doc_type="docType",
        import_request=True,
        owner_inn="ownerInn",
        participant_inn="participantInn",
        producer_inn="producerInn",
        production_date=today,
        production_type="productionType",
        products=(product,),
        reg_date=today,
        reg_number="some Number",
    )


@app.command(help="Print the sample document as the JSON body that would be sent.")
def sample() -> None:
    payload = JsonDocumentSerializer().serialize(build_sample_document())
    typer.echo(payload.decode("utf-8"))


@app.command(help=(
    "Send the sample document CALLS times from concurrent threads. "
    "At most LIMIT calls go out per window; the rest wait for the next window."
))
def demo(
    calls: int = typer.Option(20, min=1, help="Number of concurrent calls"),
    limit: int = typer.Option(10, help="Maximum calls per window"),
    window_unit: WindowUnit = typer.Option(WindowUnit.MINUTES, case_sensitive=False, help="Window length"),
    signature: str = typer.Option("someSign", help="Signature sent with every document"),
    api_url: Optional[str] = typer.Option(None, help="Override the endpoint URL"),
) -> None:
    document = build_sample_document()
    try:
        client = CrptClient(api_url=api_url, window_unit=window_unit, request_limit=limit)
    except ConfigurationError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(code=1)

    cancel = threading.Event()
    with client, ThreadPoolExecutor(max_workers=calls) as pool:
        futures = {
            pool.submit(client.call_api, document, signature, cancel=cancel): i
            for i in range(1, calls + 1)
        }
        try:
            for fut in as_completed(futures):
                i = futures[fut]
                try:
                    resp = fut.result()
                except CrptClientError as e:
                    typer.echo(f"#{i}: failed: {e}")
                    continue
                typer.echo(f"#{i}: HTTP {resp.status_code}")
        except KeyboardInterrupt:
            # Waiting calls give up their wait; the executor can then join
            cancel.set()
            typer.echo("Interrupted, cancelling calls still waiting for a permit", err=True)
            raise typer.Exit(code=130)


if __name__ == "__main__":  # pragma: no cover
    app()
