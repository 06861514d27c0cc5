"""
Tax invoice document rendering (HTML via Jinja2).

Turning the HTML into a PDF or image is left to the client.
"""
from pathlib import Path
import logging

from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.common.formatters import format_currency, format_display_date
from app.core.config import settings
from app.modules.company.schemas import CompanyOut
from app.modules.invoices.schemas import InvoiceOut

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"

jinja_env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(['html', 'xml'])
)
jinja_env.filters["currency"] = format_currency
jinja_env.filters["display_date"] = format_display_date


def document_filename(invoice_no: int, extension: str = "html") -> str:
    """Invoice_<no>.<ext>"""
    return f"Invoice_{invoice_no}.{extension}"


def render_invoice(invoice: InvoiceOut, company: CompanyOut, template_name: str = "invoice.html") -> str:
    """Render the fixed tax-invoice layout for one invoice"""
    try:
        template = jinja_env.get_template(template_name)
        return template.render(
            invoice=invoice,
            company=company,
            currency_symbol=settings.CURRENCY_SYMBOL,
            title=f"Invoice {invoice.invoice_no}",
        )
    except Exception as e:
        logger.error(f"Error rendering invoice {invoice.invoice_no}: {str(e)}")
        raise
