"""
Projectors from NF-e accessor handles to presentation records.
"""
from typing import Any, Dict, List, Optional

from models import PartyInfo, LineItem, Installment
from models.handle import NFeHandle, PartyHandle, AddressHandle
from utils.formatters import (
    format_currency,
    format_date,
    format_national_id,
)


def _count(value: Any) -> int:
    """Counts may come back as text from the document"""
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def party_data(party: Optional[PartyHandle]) -> Dict[str, Any]:
    """Identification fields of a party, {} when absent"""
    if not party:
        return {}
    return {
        "nome": party.nome(),
        "fantasia": party.fantasia(),
        "ie": party.inscricao_estadual(),
        "ie_st": party.inscricao_estadual_st(),
        "inscricao_municipal": party.inscricao_municipal(),
        "inscricao_nacional": format_national_id(party.inscricao_nacional()),
        "telefone": party.telefone(),
    }


def address_data(address: Optional[AddressHandle]) -> Dict[str, Any]:
    """Address fields, {} when absent"""
    if not address:
        return {}
    return {
        "endereco": address.logradouro(),
        "numero": address.numero(),
        "complemento": address.complemento(),
        "bairro": address.bairro(),
        "municipio": address.municipio(),
        "cep": address.cep(),
        "uf": address.uf(),
    }


def project_party(party: Optional[PartyHandle]) -> PartyInfo:
    """
    Merge a party and its address into one record.

    Each half contributes nothing when missing, so the result may carry
    only some of the fields, or none.
    """
    address = party.endereco() if party else None
    return PartyInfo(**party_data(party), **address_data(address))


def project_items(nfe: NFeHandle) -> List[LineItem]:
    """Line items in document order (1..nr_itens)"""
    items = []
    for i in range(1, _count(nfe.nr_itens()) + 1):
        row = nfe.item(i)
        items.append(LineItem(
            codigo=row.codigo(),
            descricao=row.descricao(),
            ncm=row.ncm(),
            # origin digit followed by the CST code, e.g. "0" + "00" -> "000"
            cst=_text(row.origem()) + _text(row.cst()),
            cfop=row.cfop(),
            unidade=row.unidade_comercial(),
            quantidade=format_currency(row.quantidade_comercial()),
            valor=format_currency(row.valor_unitario()),
            desconto=format_currency(row.valor_desconto()),
            total=format_currency(row.valor_produtos()),
            base_calculo=format_currency(row.base_calculo_icms()),
            icms=format_currency(row.valor_icms()),
            ipi=format_currency(row.valor_ipi()),
            porcentagem_icms=format_currency(row.porcentagem_icms(), 2),
            porcentagem_ipi=format_currency(row.porcentagem_ipi(), 2),
        ))
    return items


def project_installments(nfe: NFeHandle) -> List[Installment]:
    """Billing duplicates in document order, empty without billing data"""
    billing = nfe.cobranca()
    if not billing:
        return []

    installments = []
    for i in range(1, _count(billing.nr_duplicatas()) + 1):
        dup = billing.duplicata(i)
        installments.append(Installment(
            numero=dup.numero_duplicata(),
            vencimento=format_date(dup.vencimento_duplicata()),
            valor=format_currency(dup.valor_duplicata(), 2),
        ))
    return installments


def project_observations(nfe: NFeHandle) -> str:
    """All free-text observations, each one prefixed with a newline"""
    result = ""
    for i in range(1, _count(nfe.nr_observacoes()) + 1):
        result += "\n" + _text(nfe.observacao(i).texto())
    return result
