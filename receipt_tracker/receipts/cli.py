"""CLI commands for parsing receipt text and listing categories."""

from __future__ import annotations

import json
from typing import IO

import click
from flask import Flask, current_app
from flask.cli import with_appcontext

from receipt_tracker.api.schemas import ExtractedReceiptSchema
from receipt_tracker.constants.categories import HSA_ELIGIBILITY_NOTE, get_medical_categories
from receipt_tracker.constants.merchants import is_medical_store
from receipt_tracker.services.receipt_extractor import ExtractedReceipt, ReceiptTextExtractor


@click.group("receipt")
def receipt_cli() -> None:
    """Receipt text extraction commands."""


def register_commands(app: Flask) -> None:
    """Register CLI commands with the application."""
    app.cli.add_command(receipt_cli)

    receipt_cli.add_command(parse_receipt)
    receipt_cli.add_command(list_categories)


def _format_text(receipt: ExtractedReceipt) -> str:
    """Render an extracted receipt as human-readable text."""
    lines = [
        f"Store:    {receipt.store_name or '-'}",
        f"Medical:  {'yes' if is_medical_store(receipt.store_name) else 'unknown'}",
        f"Amount:   {receipt.amount if receipt.amount is not None else '-'}",
        f"Date:     {receipt.receipt_date.isoformat() if receipt.receipt_date else '-'}",
        f"Category: {receipt.category}",
        f"Confidence: {receipt.confidence}",
    ]
    if receipt.line_items:
        lines.append("Line items:")
        lines.extend(f"  - {item.description}: {item.price}" for item in receipt.line_items)
    if receipt.fields_to_verify:
        lines.append(f"⚠️  Verify: {', '.join(receipt.fields_to_verify)}")
    return "\n".join(lines)


@click.command("parse")
@click.argument("text_file", type=click.File("r", encoding="utf-8"), default="-")
@click.option(
    "--output-format",
    type=click.Choice(["json", "text"]),
    default="json",
    show_default=True,
    help="Output format for the extracted fields",
)
@with_appcontext
def parse_receipt(text_file: IO[str], output_format: str) -> None:
    """Parse OCR text from TEXT_FILE (or stdin) into receipt fields."""
    raw_text = text_file.read()
    receipt = ReceiptTextExtractor.from_config(current_app.config).parse(raw_text)

    if output_format == "text":
        click.echo(_format_text(receipt))
        return

    output = ExtractedReceiptSchema().dump(receipt)
    output["fields_to_verify"] = receipt.fields_to_verify
    click.echo(json.dumps(output, indent=2))


@click.command("categories")
@with_appcontext
def list_categories() -> None:
    """List the medical categories a receipt can be filed under."""
    for category in get_medical_categories():
        eligible = category["hsa_eligible"]
        marker = "✅" if eligible is True else "⚠️"
        click.echo(f"{marker} {category['value']:<15} {category['description']}")
    click.echo(HSA_ELIGIBILITY_NOTE)
