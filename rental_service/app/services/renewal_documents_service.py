import logging
from datetime import datetime
from html import escape
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from shared.helpers.date_helper import format_date_short

from ..models.contracts.contract_renewals import ContractRenewal
from ..schemas.contracts.template_context_schemas import TemplateRenderContext
from .contract_templates_service import build_render_context, process_template_content

logger = logging.getLogger(__name__)

ADJUSTMENT_MARKER = "<!--reajuste-->"

# The addendum is rendered for the contract created by the renewal, so the
# contract.original* tags describe the contract being renewed.
RENEWAL_TERM_TEMPLATE = """<h2 class="ql-align-center">TERMO ADITIVO DE RENOVAÇÃO DE CONTRATO DE LOCAÇÃO</h2>
<p class="ql-align-justify"><strong>LOCADOR:</strong> {{owner.name}}, CPF: {{owner.document}} {{owner.rg}}, {{owner.address}}.</p>
<p class="ql-align-justify"><strong>LOCATÁRIO:</strong> {{tenant.name}}, CPF: {{tenant.document}} {{tenant.rg}}, {{tenant.address}}.</p>
<p class="ql-align-justify"><strong>IMÓVEL:</strong> {{property.address}}.</p>
<p class="ql-align-justify"><strong>CLÁUSULA 1ª - DO CONTRATO RENOVADO:</strong> As partes acima renovam o contrato de locação nº {{contract.originalContractId}}, vigente de {{contract.originalStartDate}} a {{contract.originalEndDate}}.</p>
<p class="ql-align-justify"><strong>CLÁUSULA 2ª - DO NOVO PRAZO:</strong> A locação fica prorrogada por {{contract.duration}} meses, com início em {{contract.startDate}} e término em {{contract.endDate}}.</p>
<p class="ql-align-justify"><strong>CLÁUSULA 3ª - DO ALUGUEL:</strong> O aluguel mensal passa a ser de {{contract.rentValue}} ({{contract.rentValueInWords}}), com vencimento todo dia {{contract.paymentDay}}, sendo o primeiro pagamento em {{contract.firstPaymentDate}}.</p>
<!--reajuste-->
<p class="ql-align-justify"><strong>CLÁUSULA 5ª - DAS DEMAIS CONDIÇÕES:</strong> Permanecem inalteradas as demais cláusulas do contrato original referente ao período {{contract.originalPeriod}}.</p>
<p class="ql-align-center">{{DATA_LONGA}}</p>
<p class="ql-align-center">______________________________<br>{{owner.name}}<br>LOCADOR</p>
<p class="ql-align-center">______________________________<br>{{tenant.name}}<br>LOCATÁRIO</p>
<p class="ql-align-center">______________________________<br>{{guarantor.name}}<br>FIADOR</p>
{{PAGINA}}"""


def _adjustment_clause(renewal: ContractRenewal) -> str:
    return (
        '<p class="ql-align-justify"><strong>CLÁUSULA 4ª - DO REAJUSTE:</strong> '
        f"O novo valor foi ajustado pelo índice {escape(renewal.adjustment_index or '')} "
        f"em {format_date_short(renewal.renewal_date)} e será reajustado "
        "anualmente pelo mesmo índice.</p>"
    )


def render_renewal_term(db: Session, renewal: ContractRenewal,
                        now: Optional[datetime] = None) -> Tuple[TemplateRenderContext, str]:
    """Processed HTML of the renewal addendum, with the context it was built from."""
    context = build_render_context(db, renewal.contract_id)
    content = RENEWAL_TERM_TEMPLATE.replace(
        ADJUSTMENT_MARKER, _adjustment_clause(renewal))
    logger.info("Rendering renewal term %s for contract %s",
                renewal.id, renewal.contract_id)
    return context, process_template_content(content, context, now)
