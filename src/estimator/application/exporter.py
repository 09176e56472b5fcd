"""
Kiosk Estimator - Document Exporter

Turns the raw collections and the totals breakdown into the row-grouped
tables and summary block used by the PDF/CSV/email renderers.
"""
import io
import logging
from dataclasses import dataclass, asdict
from typing import Any, Mapping, Sequence

import pandas as pd

from estimator.domain.models import (
    Category,
    CATEGORY_ORDER,
    KitchenLineItem,
    LineItem,
    TotalsBreakdown,
    VanityLineItem,
)
from estimator.domain.models.config import ExportConfig

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["Category", "Item", "Quantity", "Unit", "Unit Price", "Line Total"]


@dataclass(frozen=True)
class ExportRow:
    """
    One printed line item.

    Vanity and kitchen packages carry their base package and each selected
    add-on as components; the components sum to line_total.
    """

    label: str
    quantity: float
    unit: str
    unit_price: float
    line_total: float
    components: tuple["ExportRow", ...] = ()


@dataclass(frozen=True)
class ExportSection:
    """Rows of one non-empty category."""

    category: Category
    title: str
    rows: tuple[ExportRow, ...]
    subtotal: float


@dataclass(frozen=True)
class SummaryLine:
    """Labelled amount in the summary block."""

    label: str
    amount: float


class DocumentExporter:
    """
    Builds export payloads from an estimate snapshot.

    Category order and in-category insertion order are preserved.
    """

    def __init__(self, config: ExportConfig | None = None):
        self.config = config or ExportConfig()

    def sections(self, collections: Mapping[Category, Sequence[LineItem]]) -> list[ExportSection]:
        """Row-grouped table, one section per non-empty category."""
        result = []
        for category in CATEGORY_ORDER:
            items = collections.get(category, ())
            if not items:
                continue
            rows = tuple(
                ExportRow(
                    label=item.label,
                    quantity=item.measure,
                    unit=category.spec.unit,
                    unit_price=item.unit_cost,
                    line_total=item.line_total,
                    components=self._components(item, category.spec.unit),
                )
                for item in items
            )
            result.append(ExportSection(
                category=category,
                title=category.label,
                rows=rows,
                subtotal=sum((r.line_total for r in rows), 0.0),
            ))
        return result

    def _components(self, item: LineItem, unit: str) -> tuple[ExportRow, ...]:
        """Base package plus one row per selected add-on."""
        if isinstance(item, VanityLineItem):
            parts = [(f"{item.tier.label} Vanity Package", item.base_price)]
            if item.single_to_double:
                parts.append(("Single to Double Conversion", item.conversion_cost))
            if item.plumbing_wall_change:
                parts.append(("Plumbing Wall Change", item.plumbing_cost))
        elif isinstance(item, KitchenLineItem):
            parts = [(f"{item.tier.label} Kitchen Package", item.base_price)]
            if item.cabinet_upgrade:
                parts.append(("Cabinet Upgrade", item.cabinet_cost))
            if item.countertop_upgrade:
                parts.append(("Countertop Upgrade", item.countertop_cost))
        else:
            return ()

        return tuple(
            ExportRow(label=label, quantity=item.quantity, unit=unit, unit_price=price, line_total=item.quantity * price)
            for label, price in parts
        )

    def summary(self, totals: TotalsBreakdown) -> list[SummaryLine]:
        """
        Summary block.

        Markup line only when the tier rate is above 0%, installation line only
        when installation was requested.
        """
        lines = [SummaryLine("Subtotal", totals.subtotal)]
        if totals.markup.applies:
            lines.append(SummaryLine(totals.markup.label or f"Markup ({totals.markup.rate:.0%})", totals.markup_amount))
        if totals.installation_requested:
            lines.append(SummaryLine(f"Installation ({totals.installation_rate:.0%})", totals.installation_cost))
        lines.append(SummaryLine("Grand Total", totals.grand_total))
        return lines

    def to_dataframe(self, collections: Mapping[Category, Sequence[LineItem]]) -> pd.DataFrame:
        """Line items as a flat table."""
        records = [
            {
                "Category": section.title,
                "Item": row.label,
                "Quantity": row.quantity,
                "Unit": row.unit,
                "Unit Price": round(row.unit_price, 2),
                "Line Total": round(row.line_total, 2),
            }
            for section in self.sections(collections)
            for row in section.rows
        ]
        return pd.DataFrame(records, columns=CSV_COLUMNS)

    def to_csv(self, collections: Mapping[Category, Sequence[LineItem]], totals: TotalsBreakdown) -> str:
        """
        CSV document: item table, blank line, then the summary block.

        Returns:
            CSV text (encode with config.csv_encoding when writing to disk)
        """
        buffer = io.StringIO()
        self.to_dataframe(collections).to_csv(buffer, index=False)

        summary = pd.DataFrame(
            [{"Item": line.label, "Line Total": round(line.amount, 2)} for line in self.summary(totals)],
            columns=["Item", "Line Total"],
        )
        buffer.write("\n")
        summary.to_csv(buffer, index=False)

        logger.debug(f"CSV export: {sum(len(v) for v in collections.values())} rows")
        return buffer.getvalue()

    def to_csv_bytes(self, collections: Mapping[Category, Sequence[LineItem]], totals: TotalsBreakdown) -> bytes:
        return self.to_csv(collections, totals).encode(self.config.csv_encoding)

    def format_amount(self, amount: float) -> str:
        return f"{self.config.currency_symbol}{amount:,.2f}"

    def to_email_payload(
        self,
        collections: Mapping[Category, Sequence[LineItem]],
        totals: TotalsBreakdown,
        recipient: str | None = None,
    ) -> dict[str, Any]:
        """Plain dict for the external mail dispatcher."""
        return {
            "to": recipient,
            "subject": self.config.email_subject,
            "sections": [
                {
                    "title": s.title,
                    "rows": [asdict(r) for r in s.rows],
                    "subtotal": s.subtotal,
                }
                for s in self.sections(collections)
            ],
            "summary": [
                {"label": line.label, "amount": line.amount, "display": self.format_amount(line.amount)}
                for line in self.summary(totals)
            ],
            "grand_total": totals.grand_total,
        }
