from typing import Sequence

import pandas as pd
from reportlab.pdfgen import canvas
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.units import inch
from reportlab.lib import colors

from .models import Arrangement, Room

TOP = 10.1 * inch
BOTTOM = 1 * inch


def _canvas_header(c: canvas.Canvas, title: str):
    c.setFont("Helvetica-Bold", 14)
    c.drawString(1 * inch, 10.5 * inch, title)
    c.setStrokeColor(colors.black)
    c.line(1 * inch, 10.4 * inch, 7.5 * inch, 10.4 * inch)


def export_seating_chart_pdf(path: str, chart: Arrangement, rooms: Sequence[Room]):
    """One page (or more) per room listing both seats of every desk."""
    c = canvas.Canvas(path, pagesize=LETTER)
    first = True
    for room in rooms:
        desks = chart.get(room.id)
        if desks is None:
            continue
        if not first:
            c.showPage()
        first = False
        _canvas_header(c, f"Seating Chart: {room.name}")
        y = TOP
        if room.supervisors:
            c.setFont("Helvetica-Oblique", 10)
            c.drawString(1 * inch, y, "Supervisor: " + ", ".join(room.supervisors))
            y -= 0.3 * inch
        c.setFont("Helvetica", 10)
        for i, desk in enumerate(desks):
            if y < BOTTOM:
                c.showPage()
                _canvas_header(c, f"Seating Chart: {room.name} (cont.)")
                c.setFont("Helvetica", 10)
                y = TOP
            slots = [f"{p.display_name} ({p.group})" if p else "Empty" for p in desk.seats]
            c.drawString(0.8 * inch, y, f"Desk {i + 1}:  {slots[0]}  |  {slots[1]}")
            y -= 0.24 * inch
    c.save()


def export_placement_list_pdf(path: str, table: pd.DataFrame):
    """Placement list grouped by original class, as built by io_utils.placement_table."""
    c = canvas.Canvas(path, pagesize=LETTER)
    _canvas_header(c, "Student Placement List by Original Class")
    y = TOP
    for group, rows in table.groupby("class", sort=True):
        if y < BOTTOM + 0.5 * inch:
            c.showPage()
            _canvas_header(c, "Student Placement List by Original Class (cont.)")
            y = TOP
        c.setFont("Helvetica-Bold", 11)
        c.drawString(0.8 * inch, y, f"Original Class: {group}")
        y -= 0.26 * inch
        c.setFont("Helvetica", 9)
        for row in rows.itertuples(index=False):
            if y < BOTTOM:
                c.showPage()
                _canvas_header(c, f"Original Class: {group} (cont.)")
                c.setFont("Helvetica", 9)
                y = TOP
            c.drawString(1 * inch, y, f"{row.first_name} {row.last_name}  •  {row.room}  •  {row.desk}")
            y -= 0.2 * inch
        y -= 0.1 * inch
    c.save()
