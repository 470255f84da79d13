from datetime import datetime
from io import BytesIO

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

COLUMNS = [
    ("usn", "USN"),
    ("name", "Name"),
    ("cie_total", "CIE Total"),
    ("assignment", "Assignment"),
    ("quiz", "Quiz"),
    ("seminar", "Seminar"),
    ("overall_total", "Overall Total"),
]


def overall_totals_csv(subject, rows):
    df = pd.DataFrame(rows, columns=[key for key, _ in COLUMNS])
    df = df.rename(columns=dict(COLUMNS))

    output = BytesIO()
    title = f"{subject.subject_code} - {subject.subject_name} (Overall Totals)\n"
    output.write(title.encode("utf-8"))
    output.write(df.to_csv(index=False).encode("utf-8"))
    output.seek(0)
    return output


def overall_totals_pdf(subject, rows):
    buffer = BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4, leftMargin=24, rightMargin=24, topMargin=24, bottomMargin=24)
    styles = getSampleStyleSheet()
    now_text = datetime.now().strftime("%Y-%m-%d %H:%M")

    elements = [
        Paragraph(f"{subject.subject_code} - {subject.subject_name}", styles["Title"]),
        Paragraph(f"Overall Totals | Semester: {subject.semester} | Generated: {now_text}", styles["Normal"]),
        Spacer(1, 12)
    ]

    table_data = [[label for _, label in COLUMNS]]
    for row in rows:
        table_data.append([f"{row[key]:g}" if isinstance(row[key], float) else str(row[key]) for key, _ in COLUMNS])

    if len(table_data) == 1:
        table_data.append(["--", "No data", "--", "--", "--", "--", "--"])

    table = Table(table_data, repeatRows=1)
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.black),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("ALIGN", (2, 1), (-1, -1), "CENTER"),
    ]))

    elements.append(table)
    doc.build(elements)
    buffer.seek(0)
    return buffer
