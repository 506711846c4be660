"""
Command-line interface for VC Builder.

Usage:
    vc-build fields.json
    vc-build https://example.com/credentials/123
    cat fields.json | vc-build -
"""

from __future__ import annotations

import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

import click
import httpx
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from vc_builder.builder import MissingRequiredFieldError, VerifiableCredentialBuilder
from vc_builder.credential import VerifiableCredential
from vc_builder.dates import format_date
from vc_builder.status import StatusListError, parse_credential_status


console = Console()


def format_result(credential: VerifiableCredential) -> None:
    """Print a summary of the assembled credential."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Field", style="dim")
    table.add_column("Value")

    table.add_row("Credential ID", credential.id)
    table.add_row("Issuer", credential.issuer)
    table.add_row("Types", ", ".join(str(t) for t in credential.types))
    table.add_row("Subjects", str(len(credential.credential_subject)))
    table.add_row("Issued", format_date(credential.issuance_date))
    if credential.expiration_date:
        table.add_row("Expires", format_date(credential.expiration_date))

    serialized = credential.to_dict()
    try:
        entries = parse_credential_status(serialized)
    except StatusListError:
        # Attached verbatim; only the summary cannot describe it
        entries = []
        table.add_row("Credential Status", "[yellow]unrecognized entry[/]")
    for entry in entries:
        table.add_row("Status Purpose", entry.status_purpose)
        table.add_row("Status Index", str(entry.status_list_index))

    proof = serialized.get("proof")
    if isinstance(proof, dict):
        table.add_row("Proof", str(proof.get("type", "unknown")))
        if "cryptosuite" in proof:
            table.add_row("Cryptosuite", str(proof["cryptosuite"]))
    elif proof is not None:
        table.add_row("Proof", "[yellow]unrecognized proof[/]")
    else:
        table.add_row("Proof", "[dim]none (unsigned)[/]")

    console.print(Panel(table, title="Verifiable Credential", border_style="green"))


def load_fields(source: str, timeout: float = 30.0) -> dict[str, Any]:
    """Load credential fields from file, URL, or stdin.

    Args:
        source: File path, URL, or "-" for stdin.
        timeout: HTTP request timeout in seconds.

    Returns:
        Parsed credential JSON.
    """
    if source == "-":
        # Read from stdin
        content = sys.stdin.read()
        return json.loads(content)

    if source.startswith("http://") or source.startswith("https://"):
        # Fetch from URL
        with httpx.Client(timeout=timeout) as client:
            response = client.get(
                source,
                headers={"Accept": "application/vc+ld+json, application/json"},
            )
            response.raise_for_status()
            return response.json()

    # Read from file
    path = Path(source)
    if not path.exists():
        raise click.ClickException(f"File not found: {source}")

    with path.open() as f:
        return json.load(f)


def _error(message: str, json_output: bool) -> None:
    if json_output:
        console.print_json(data={"error": message})
    else:
        console.print(f"[red]Error:[/] {message}")
    sys.exit(2)


@click.command()
@click.argument("source", required=True)
@click.option(
    "--expiration-date",
    type=click.DateTime(formats=["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%dT%H:%M:%SZ"]),
    default=None,
    help="Override expirationDate (interpreted as UTC)",
)
@click.option(
    "--no-proof",
    is_flag=True,
    help="Strip any proof and emit the unsigned credential",
)
@click.option(
    "--canonical",
    is_flag=True,
    help="Emit the canonical (JCS-style) JSON text only",
)
@click.option(
    "--json-output",
    is_flag=True,
    help="Output the credential as JSON only",
)
@click.option(
    "--timeout",
    type=float,
    default=30.0,
    help="HTTP request timeout in seconds",
)
@click.version_option(package_name="vc-builder")
def main(
    source: str,
    expiration_date: datetime | None,
    no_proof: bool,
    canonical: bool,
    json_output: bool,
    timeout: float,
) -> None:
    """Assemble a W3C Verifiable Credential.

    SOURCE is a JSON object using the credential key names
    (@context, id, type, issuer, credentialSubject, issuanceDate, ...) and can be:
    - A file path (e.g., fields.json)
    - A URL (e.g., https://example.com/credentials/123)
    - "-" to read from stdin

    Examples:

        vc-build fields.json

        vc-build --no-proof --canonical signed.json

        cat fields.json | vc-build --json-output -
    """
    try:
        fields = load_fields(source, timeout=timeout)
        credential = VerifiableCredential.from_dict(fields)

        if expiration_date is not None or no_proof:
            builder = VerifiableCredentialBuilder.from_credential(credential)
            if expiration_date is not None:
                builder.set_expiration_date(expiration_date)
            if no_proof:
                builder.set_proof(None)
            credential = builder.build()

        if canonical:
            click.echo(credential.canonical_json())
        elif json_output:
            console.print_json(data=credential.to_dict())
        else:
            format_result(credential)
            console.print_json(data=credential.to_dict())

    except click.ClickException as e:
        _error(e.format_message(), json_output)

    except MissingRequiredFieldError as e:
        _error(str(e), json_output)

    except json.JSONDecodeError as e:
        _error(f"Invalid JSON: {e}", json_output)

    except httpx.HTTPError as e:
        _error(f"HTTP error: {e}", json_output)

    except Exception as e:
        _error(str(e), json_output)


if __name__ == "__main__":
    main()
