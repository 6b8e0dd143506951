"""
Visualization and export utilities for team capacity.

This module provides functions for charting team utilization and an
engineer's allocations, and for exporting the team overview to Excel.
"""

import os
from typing import Dict, List, Optional

import matplotlib.pyplot as plt
import numpy as np
from openpyxl import Workbook
from openpyxl.styles import PatternFill, Font, Alignment
from openpyxl.utils import get_column_letter

from analysis.metrics import UtilizationBand
from analysis.overview import EngineerOverview
from models import Assignment, Project
from utils.logger import logger

# Band to color mapping, matching the capacity bars of the web client
BAND_COLOR_MAP = {
    UtilizationBand.LOW: "#22c55e",  # Green
    UtilizationBand.MEDIUM: "#facc15",  # Yellow
    UtilizationBand.HIGH: "#dc2626",  # Red
}

BAND_FILL_MAP = {
    UtilizationBand.LOW: "C6EFCE",
    UtilizationBand.MEDIUM: "FFEB9C",
    UtilizationBand.HIGH: "FFC7CE",
}


def _save_or_close(fig, filename: Optional[str], what: str) -> None:
    if filename:
        directory = os.path.dirname(filename)
        if directory:
            os.makedirs(directory, exist_ok=True)
        fig.savefig(filename, dpi=150, bbox_inches="tight")
        logger.info(f"{what} saved as {filename}")
    plt.close(fig)


def plot_team_capacity(
    rows: List[EngineerOverview], filename: Optional[str] = None
) -> None:
    """
    Plot a horizontal bar per engineer showing their utilization.

    Args:
        rows: Team overview rows
        filename: File to save the plot (None to discard)
    """
    if not rows:
        logger.warning("No engineers provided for capacity chart.")
        return

    fig, ax = plt.subplots(figsize=(10, max(3, 0.45 * len(rows) + 1)))

    labels = [row.engineer.name for row in rows]
    values = [row.usage_percent for row in rows]
    colors = [BAND_COLOR_MAP[row.band] for row in rows]
    positions = np.arange(len(rows))

    ax.barh(positions, [100] * len(rows), color="#e5e7eb")
    bars = ax.barh(positions, values, color=colors)

    for bar, row in zip(bars, rows):
        ax.text(
            bar.get_width() + 1,
            bar.get_y() + bar.get_height() / 2,
            f"{row.usage_percent}% ({row.capacity.available_capacity}% free)",
            va="center",
            fontsize=9,
        )

    ax.set_yticks(positions)
    ax.set_yticklabels(labels)
    ax.invert_yaxis()
    ax.set_xlim(0, 130)
    ax.set_xlabel("Capacity Used (%)")
    ax.set_title("Team Capacity")
    ax.grid(axis="x", linestyle="--", alpha=0.3)
    fig.tight_layout()

    _save_or_close(fig, filename, "Team capacity chart")


def plot_engineer_allocations(
    assignments: List[Assignment],
    projects: Dict[str, Project],
    filename: Optional[str] = None,
) -> None:
    """
    Plot the allocation of each of an engineer's assignments.

    Args:
        assignments: The engineer's assignments
        projects: Projects keyed by id, used for labels
        filename: File to save the plot (None to discard)
    """
    if not assignments:
        logger.warning("No assignments provided for allocation chart.")
        return

    fig, ax = plt.subplots(figsize=(10, 6))

    labels = [
        projects[a.project_id].name if a.project_id in projects else a.project_id
        for a in assignments
    ]
    values = [a.allocation_percentage for a in assignments]
    bars = ax.bar(range(len(values)), values, color="#2563eb", alpha=0.7)

    for bar in bars:
        height = bar.get_height()
        ax.text(
            bar.get_x() + bar.get_width() / 2,
            height,
            f"{height:.0f}%",
            ha="center",
            va="bottom",
            fontsize=9,
        )

    ax.set_xticks(range(len(values)))
    ax.set_xticklabels(labels, rotation=30, ha="right")
    ax.set_ylim(0, 100)
    ax.set_yticks(range(0, 101, 10))
    ax.set_ylabel("Allocation %")
    ax.set_title("Current Project Allocation")
    ax.grid(axis="y", linestyle="--", alpha=0.3)
    fig.tight_layout()

    _save_or_close(fig, filename, "Allocation chart")


def export_to_excel(
    filename: str,
    rows: List[EngineerOverview],
    projects: Dict[str, Project],
) -> bool:
    """
    Export the team overview and active assignments to Excel.

    Args:
        filename: File to save the Excel spreadsheet
        rows: Team overview rows
        projects: Projects keyed by id

    Returns:
        bool: True if export successful
    """
    wb = Workbook()

    header_fill = PatternFill(start_color="D0D0D0", end_color="D0D0D0", fill_type="solid")
    header_font = Font(bold=True)
    center_align = Alignment(horizontal="center")

    # Team sheet
    ws1 = wb.active
    ws1.title = "Team"
    ws1.append([
        "Engineer ID",
        "Name",
        "Email",
        "Department",
        "Skills",
        "MaxCapacity",
        "Used",
        "Available",
        "Utilization %",
        "Band",
    ])

    for cell in ws1[1]:
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = center_align

    for row in rows:
        ws1.append([
            row.engineer.id,
            row.engineer.name,
            row.engineer.email,
            row.engineer.department or "",
            ",".join(sorted(row.engineer.skills)),
            row.capacity.max_capacity,
            row.capacity.used_capacity,
            row.capacity.available_capacity,
            row.usage_percent,
            row.band.value,
        ])
        band_color = BAND_FILL_MAP[row.band]
        ws1.cell(row=ws1.max_row, column=10).fill = PatternFill(
            start_color=band_color, end_color=band_color, fill_type="solid"
        )

    # Assignments sheet
    ws2 = wb.create_sheet("Active Assignments")
    ws2.append(["AssignmentID", "EngineerID", "Project", "Allocation %", "Role", "Start", "End"])

    for cell in ws2[1]:
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = center_align

    for row in rows:
        for a in row.capacity.active_assignments:
            project = projects.get(a.project_id)
            ws2.append([
                a.id,
                a.engineer_id,
                project.name if project else a.project_id,
                a.allocation_percentage,
                a.role or "",
                a.start_date.strftime("%Y-%m-%d") if a.start_date else "-",
                a.end_date.strftime("%Y-%m-%d") if a.end_date else "-",
            ])

    # Auto-size columns
    for ws in (ws1, ws2):
        for col_idx, column in enumerate(ws.columns, start=1):
            width = max(len(str(cell.value)) if cell.value is not None else 0 for cell in column)
            ws.column_dimensions[get_column_letter(col_idx)].width = width + 2

    try:
        directory = os.path.dirname(filename)
        if directory:
            os.makedirs(directory, exist_ok=True)
        wb.save(filename)
        logger.info(f"Team overview exported to {filename}")
        return True
    except OSError as e:
        logger.error(f"Error saving Excel file {filename}: {e}")
        return False
