from __future__ import annotations

from datetime import datetime, timezone
from io import BytesIO
from typing import Any, Dict, Optional

from django.utils.dateparse import parse_datetime
from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle
from xml.sax.saxutils import escape


def _build_table(data, header_bg=colors.Color(0.15, 0.25, 0.55), header_text=colors.whitesmoke):
	tbl = Table(data, colWidths=[160, 330])
	tbl.setStyle(TableStyle([
		('BACKGROUND', (0, 0), (-1, 0), header_bg),
		('TEXTCOLOR', (0, 0), (-1, 0), header_text),
		('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
		('FONTSIZE', (0, 0), (-1, 0), 11),
		('ALIGN', (0, 0), (-1, -1), 'LEFT'),
		('VALIGN', (0, 0), (-1, -1), 'TOP'),
		('INNERGRID', (0, 0), (-1, -1), 0.5, colors.grey),
		('BOX', (0, 0), (-1, -1), 0.75, colors.grey),
		('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.whitesmoke, colors.Color(0.97, 0.97, 0.99)]),
	]))
	return tbl


def _attachment_label(data_uri: Optional[str]) -> str:
	if not data_uri:
		return '—'
	if data_uri.startswith('data:image'):
		return 'Image attached'
	if data_uri.startswith('data:application/pdf'):
		return 'PDF attached'
	return 'File attached'


def _created_label(created: Any) -> str:
	if isinstance(created, str):
		created = parse_datetime(created)
	return created.strftime('%Y-%m-%d %H:%M:%S') if created else '—'


def build_report_pdf(report: Dict[str, Any], owner_email: str = '') -> bytes:
	"""Render a saved report (the dict returned by the report actions) as PDF bytes."""
	buffer = BytesIO()
	doc = SimpleDocTemplate(
		buffer,
		pagesize=letter,
		leftMargin=50,
		rightMargin=50,
		topMargin=90,
		bottomMargin=60,
		title="SymptomCare Report",
	)
	styles = getSampleStyleSheet()
	styles['Title'].fontSize = 20
	styles['Title'].leading = 24
	styles['Heading2'].spaceBefore = 12
	styles['Heading2'].spaceAfter = 6
	story = []

	story.append(Paragraph("SymptomCare Analysis Report", styles['Title']))
	story.append(Spacer(1, 6))
	story.append(Paragraph("AI-assisted analysis. This document does not replace a professional medical evaluation.", styles['Normal']))
	story.append(Spacer(1, 14))

	info = [
		["REPORT", ""],
		["Report ID", report['id']],
		["Owner", owner_email or report['user_id']],
		["Created", _created_label(report.get('created_at'))],
		["Report file", _attachment_label(report.get('report_file_data_uri'))],
	]
	story.append(_build_table(info))
	story.append(Spacer(1, 16))

	result = report.get('analysis_result') or {}
	diagnoses = result.get('potentialDiagnoses') or []
	levels = result.get('confidenceLevels') or []
	rows = [["POTENTIAL DIAGNOSES", "CONFIDENCE"]]
	for i, name in enumerate(diagnoses):
		conf = levels[i] if i < len(levels) else None
		rows.append([Paragraph(escape(str(name)), styles['Normal']), f"{conf:.0%}" if isinstance(conf, (int, float)) else '—'])
	if len(rows) == 1:
		rows.append(["N/A", "—"])
	story.append(_build_table(rows, header_bg=colors.Color(0.05, 0.45, 0.65)))
	story.append(Spacer(1, 16))

	story.append(Paragraph("Symptom description", styles['Heading2']))
	story.append(Paragraph(escape(report.get('symptom_description') or ''), styles['Normal']))
	story.append(Spacer(1, 10))
	if report.get('scan_findings_description'):
		story.append(Paragraph("Scan findings", styles['Heading2']))
		story.append(Paragraph(escape(report['scan_findings_description']), styles['Normal']))
		story.append(Spacer(1, 10))
	if result.get('additionalNotes'):
		story.append(Paragraph("Additional notes", styles['Heading2']))
		story.append(Paragraph(escape(str(result['additionalNotes'])), styles['Normal']))
		story.append(Spacer(1, 10))

	story.append(Paragraph("<b>Disclaimer:</b> This report is generated automatically and is not a substitute for an in-person clinical evaluation. If symptoms persist or worsen, consult a healthcare professional.", styles['Normal']))

	def _header_footer(c, doc_obj):
		c.saveState()
		c.setFillColorRGB(0.05, 0.25, 0.55)
		c.rect(0, letter[1] - 70, letter[0], 70, fill=1, stroke=0)
		c.setFillColor(colors.whitesmoke)
		c.setFont('Helvetica-Bold', 16)
		c.drawString(40, letter[1] - 38, 'SymptomCare')
		c.setFont('Helvetica', 8.5)
		c.drawString(40, letter[1] - 52, 'AI-assisted symptom report')
		c.setFillColor(colors.grey)
		c.setFont('Helvetica', 8)
		generated = datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M UTC')
		c.drawCentredString(letter[0] / 2.0, 40, f"SymptomCare • Generated: {generated} • Page {doc_obj.page}")
		c.restoreState()

	doc.build(story, onFirstPage=_header_footer, onLaterPages=_header_footer)
	return buffer.getvalue()
