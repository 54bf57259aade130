"""
Printable and emailable estimate documents.

Both documents are built from the same ``EstimateTotals`` and the same money
formatter, so the printed and emailed figures always agree. The HTML page is
fully self-contained: inline styles, no external fonts, images or scripts.
"""
from collections import namedtuple
from html import escape as _esc
from urllib.parse import quote

from handyops.pricing import OVERHEAD_MARKUP, catalog_rate
from handyops.utils.helpers import format_currency, format_hours

EmailDraft = namedtuple('EmailDraft', ['subject', 'body', 'mailto_url'])

_MARKUP_NOTE = '*Includes {:.0%} markup for materials/overhead'.format(OVERHEAD_MARKUP)


def _rate_label(service):
    rate = format_currency(catalog_rate(service) or 0)
    if service.get('pricing_type') == 'hourly':
        return '{}/hr x {}'.format(rate, format_hours(service.get('estimated_duration_hours')))
    return '{} flat rate'.format(rate)


def estimate_lines(line_items):
    """
    Display rows shared by every rendering

    Returns:
        list: dicts with name, quantity, rate and total strings
    """
    return [
        {
            'name': item.service.get('name') or 'Service',
            'quantity': item.quantity,
            'rate': _rate_label(item.service),
            'total': format_currency(item.line_total),
        }
        for item in line_items
    ]


def estimate_summary(totals):
    """Labelled totals, formatted once for both documents"""
    return [
        ('Labor Cost', format_currency(totals.labor_cost)),
        ('Est. Duration', format_hours(totals.total_duration_hours)),
        ('Suggested Total', format_currency(totals.suggested_total)),
    ]


# ---------------------------------------------------------------------------
# Print (HTML)
# ---------------------------------------------------------------------------

def _line_row(line):
    return (
        '<tr>'
        '<td style="padding:8px 0;color:#111827;font-size:14px;">{name}</td>'
        '<td style="padding:8px 0;color:#4b5563;font-size:14px;text-align:center;">{qty}</td>'
        '<td style="padding:8px 0;color:#4b5563;font-size:14px;">{rate}</td>'
        '<td style="padding:8px 0;color:#111827;font-size:14px;font-weight:600;text-align:right;">{total}</td>'
        '</tr>'
    ).format(name=_esc(str(line['name'])), qty=_esc(str(line['quantity'])),
             rate=_esc(line['rate']), total=_esc(line['total']))


def _summary_row(label, value, is_last=False):
    border = 'border-top:1px solid #e5e7eb;' if is_last else ''
    size = '20px' if is_last else '14px'
    weight = '700' if is_last else '500'
    return (
        '<tr style="{border}">'
        '<td style="padding:8px 0;color:#4b5563;font-size:{size};font-weight:{weight};">{label}</td>'
        '<td style="padding:8px 0;color:#111827;font-size:{size};font-weight:{weight};text-align:right;">{value}</td>'
        '</tr>'
    ).format(border=border, size=size, weight=weight, label=_esc(label), value=_esc(value))


def render_estimate_html(line_items, totals, business_name, generated_on, contact_line=''):
    """Return a complete HTML document for printing an estimate."""
    lines = ''.join(_line_row(line) for line in estimate_lines(line_items))
    summary = estimate_summary(totals)
    summary_rows = ''.join(
        _summary_row(label, value, is_last=(i == len(summary) - 1))
        for i, (label, value) in enumerate(summary)
    )
    contact = (
        '<p style="color:#6b7280;margin:4px 0 0;font-size:13px;">{}</p>'.format(_esc(contact_line))
        if contact_line else ''
    )

    return (
        '<!DOCTYPE html>'
        '<html lang="en"><head><meta charset="utf-8">'
        '<title>Estimate - {business}</title>'
        '<style>@media print {{ body {{ margin:0; }} }}</style>'
        '</head>'
        '<body style="margin:0;padding:0;background:#ffffff;">'
        '<div style="font-family:Arial,Helvetica,sans-serif;max-width:720px;margin:0 auto;padding:40px 24px;">'
        '<div style="border-bottom:2px solid #2563eb;padding-bottom:16px;margin-bottom:24px;">'
        '<h1 style="color:#111827;font-size:26px;margin:0;">{business}</h1>'
        '{contact}'
        '<p style="color:#6b7280;margin:8px 0 0;font-size:14px;">Service Estimate &middot; {date}</p>'
        '</div>'
        '<table style="width:100%;border-collapse:collapse;">'
        '<thead><tr>'
        '<th style="text-align:left;color:#6b7280;font-size:12px;text-transform:uppercase;padding-bottom:8px;">Service</th>'
        '<th style="text-align:center;color:#6b7280;font-size:12px;text-transform:uppercase;padding-bottom:8px;">Qty</th>'
        '<th style="text-align:left;color:#6b7280;font-size:12px;text-transform:uppercase;padding-bottom:8px;">Rate</th>'
        '<th style="text-align:right;color:#6b7280;font-size:12px;text-transform:uppercase;padding-bottom:8px;">Amount</th>'
        '</tr></thead>'
        '<tbody>{lines}</tbody>'
        '</table>'
        '<div style="margin-top:24px;padding:16px 20px;background:#f9fafb;border:1px solid #e5e7eb;border-radius:8px;">'
        '<table style="width:100%;border-collapse:collapse;">{summary}</table>'
        '<p style="color:#6b7280;font-size:12px;margin:12px 0 0;">{note}</p>'
        '</div>'
        '<p style="color:#9ca3af;font-size:12px;margin-top:32px;">'
        'This estimate is informational and is not a committed price.'
        '</p>'
        '</div></body></html>'
    ).format(
        business=_esc(business_name),
        contact=contact,
        date=_esc(generated_on.strftime('%B %d, %Y')),
        lines=lines,
        summary=summary_rows,
        note=_esc(_MARKUP_NOTE),
    )


# ---------------------------------------------------------------------------
# Email (plain text)
# ---------------------------------------------------------------------------

def render_estimate_email(line_items, totals, business_name, generated_on, recipient=''):
    """Return the subject, body and a ``mailto:`` URL for an estimate."""
    subject = 'Service Estimate from {} - {}'.format(business_name, generated_on.strftime('%B %d, %Y'))

    body_lines = ['Hello,', '', 'Thank you for your interest. Here is your service estimate:', '']
    for line in estimate_lines(line_items):
        body_lines.append('- {} (Qty: {}) - {} = {}'.format(
            line['name'], line['quantity'], line['rate'], line['total']))
    body_lines.append('')
    for label, value in estimate_summary(totals):
        body_lines.append('{}: {}'.format(label, value))
    body_lines += [
        '',
        _MARKUP_NOTE,
        '',
        'This estimate is informational and is not a committed price.',
        '',
        'Best regards,',
        business_name,
    ]
    body = '\n'.join(body_lines)

    mailto_url = 'mailto:{}?subject={}&body={}'.format(
        quote(recipient or '', safe='@'), quote(subject, safe=''), quote(body, safe=''))
    return EmailDraft(subject=subject, body=body, mailto_url=mailto_url)
