"""
Document assembler - builds the complete DANFE presentation data.
"""
from datetime import tzinfo
from typing import Any, Dict, Optional, Union
from loguru import logger

from models import PresentationDocument
from models.handle import NFeHandle, TransportHandle
from utils.formatters import format_access_key, format_currency, format_date, format_time
from core.projectors import (
    project_party,
    project_items,
    project_installments,
    project_observations,
)


def is_nfe_handle(nfe: Any) -> bool:
    """Minimal accessor contract: a callable document number accessor"""
    return nfe is not None and callable(getattr(nfe, "nr_nota", None))


def _totals(nfe: NFeHandle) -> Dict[str, str]:
    total = nfe.total()
    return {
        "base_calculo_icms": format_currency(total.base_calculo_icms(), 2),
        "imposto_icms": format_currency(total.valor_icms(), 2),
        "base_calculo_icms_st": format_currency(total.base_calculo_icms_st(), 2),
        "imposto_icms_st": format_currency(total.valor_icms_st(), 2),
        "imposto_tributos": format_currency(total.valor_total_tributos(), 2),
        "total_produtos": format_currency(total.valor_produtos(), 2),
        "total_frete": format_currency(total.valor_frete(), 2),
        "total_seguro": format_currency(total.valor_seguro(), 2),
        "total_desconto": format_currency(total.valor_desconto(), 2),
        "total_despesas": format_currency(total.valor_outras_despesas(), 2),
        "total_ipi": format_currency(total.valor_ipi(), 2),
        "total_nota": format_currency(total.valor_nota(), 2),
    }


def _volume_fields(transport: Optional[TransportHandle]) -> Dict[str, Any]:
    volume = transport.volume() if transport else None
    if not volume:
        return {}
    return {
        "volume_quantidade": format_currency(volume.quantidade_volumes()),
        "volume_especie": volume.especie(),
        "volume_marca": volume.marca(),
        "volume_numeracao": volume.numeracao(),
        "volume_pesoBruto": format_currency(volume.peso_bruto()),
        "volume_pesoLiquido": format_currency(volume.peso_liquido()),
    }


def _vehicle_fields(transport: Optional[TransportHandle]) -> Dict[str, Any]:
    vehicle = transport.veiculo() if transport else None
    if not vehicle:
        return {}
    return {
        "veiculo_placa": vehicle.placa(),
        "veiculo_placa_uf": vehicle.uf(),
        "veiculo_antt": vehicle.antt(),
    }


def _service_fields(nfe: NFeHandle) -> Dict[str, Any]:
    service = nfe.servico()
    if not service:
        return {}
    return {
        "total_servico": format_currency(service.valor_total_servico_nao_incidente()),
        "total_issqn": format_currency(service.valor_total_iss()),
        "base_calculo_issqn": format_currency(service.base_calculo()),
    }


def assemble(nfe: Optional[NFeHandle],
             tz: Union[tzinfo, str, None] = None) -> Optional[PresentationDocument]:
    """
    Build the presentation document for `nfe`.

    Args:
        nfe: Parsed invoice exposing the NFeHandle accessors
        tz: Zone used for the protocol time (None = runtime local zone)

    Returns:
        PresentationDocument, or None when `nfe` is absent or not an NF-e handle.
        Its `to_template_data()` (also plain `model_dump()`) is the template
        contract: optional sections the invoice lacks have no keys there.
    """
    if not is_nfe_handle(nfe):
        return None

    received = nfe.data_hora_recebimento()
    transport = nfe.transporte()

    fields: Dict[str, Any] = {
        "operacao": nfe.tipo_operacao(),
        "natureza": nfe.natureza_operacao(),
        "numero": nfe.nr_nota(),
        "serie": nfe.serie(),
        "chave": format_access_key(nfe.chave()),
        "protocolo": nfe.protocolo(),
        "data_protocolo": format_date(received) + " " + format_time(received, tz),
        "destinatario": project_party(nfe.destinatario()),
        "emitente": project_party(nfe.emitente()),
        "data_emissao": format_date(nfe.data_emissao()),
        "data_saida": format_date(nfe.data_entrada_saida()),
        **_totals(nfe),
        "transportador": project_party(nfe.transportador()),
        "informacoes_fisco": nfe.informacoes_fisco(),
        "informacoes_complementares": nfe.informacoes_complementares(),
        "observacao": project_observations(nfe),
        "modalidade_frete": nfe.modalidade_frete(),
        "modalidade_frete_texto": nfe.modalidade_frete_texto(),
        "itens": project_items(nfe),
        "duplicatas": project_installments(nfe),
    }
    fields.update(_volume_fields(transport))
    fields.update(_vehicle_fields(transport))
    fields.update(_service_fields(nfe))

    document = PresentationDocument(**fields)
    logger.debug(f"Assembled DANFE data for NF-e {document.numero} "
                 f"({len(document.itens)} items, {len(document.duplicatas)} duplicates)")
    return document
