"""
Read-only accessor surface of a parsed NF-e.

The DANFE pipeline never touches XML or any concrete document class; it only
calls the accessors below. `core.nfe_xml.NFeXml` is the bundled
implementation, tests use in-memory fakes.

Scalar accessors return the raw value as found in the document (usually a
string) or None when the field is absent. Indexed accessors are 1-based.
"""
from typing import Any, Optional, Protocol


class AddressHandle(Protocol):
    """Address sub-record of a party (enderEmit / enderDest)"""

    def logradouro(self) -> Optional[str]: ...
    def numero(self) -> Optional[str]: ...
    def complemento(self) -> Optional[str]: ...
    def bairro(self) -> Optional[str]: ...
    def municipio(self) -> Optional[str]: ...
    def cep(self) -> Optional[str]: ...
    def uf(self) -> Optional[str]: ...


class PartyHandle(Protocol):
    """Issuer, recipient or carrier"""

    def nome(self) -> Optional[str]: ...
    def fantasia(self) -> Optional[str]: ...
    def inscricao_estadual(self) -> Optional[str]: ...
    def inscricao_estadual_st(self) -> Optional[str]: ...
    def inscricao_municipal(self) -> Optional[str]: ...
    def inscricao_nacional(self) -> Optional[str]: ...
    def telefone(self) -> Optional[str]: ...
    def endereco(self) -> Optional[AddressHandle]: ...


class TotalsHandle(Protocol):
    def base_calculo_icms(self) -> Any: ...
    def valor_icms(self) -> Any: ...
    def base_calculo_icms_st(self) -> Any: ...
    def valor_icms_st(self) -> Any: ...
    def valor_total_tributos(self) -> Any: ...
    def valor_produtos(self) -> Any: ...
    def valor_frete(self) -> Any: ...
    def valor_seguro(self) -> Any: ...
    def valor_desconto(self) -> Any: ...
    def valor_outras_despesas(self) -> Any: ...
    def valor_ipi(self) -> Any: ...
    def valor_nota(self) -> Any: ...


class ItemHandle(Protocol):
    """One product/service line (det)"""

    def codigo(self) -> Optional[str]: ...
    def descricao(self) -> Optional[str]: ...
    def ncm(self) -> Optional[str]: ...
    def origem(self) -> Optional[str]: ...
    def cst(self) -> Optional[str]: ...
    def cfop(self) -> Optional[str]: ...
    def unidade_comercial(self) -> Optional[str]: ...
    def quantidade_comercial(self) -> Any: ...
    def valor_unitario(self) -> Any: ...
    def valor_desconto(self) -> Any: ...
    def valor_produtos(self) -> Any: ...
    def base_calculo_icms(self) -> Any: ...
    def valor_icms(self) -> Any: ...
    def valor_ipi(self) -> Any: ...
    def porcentagem_icms(self) -> Any: ...
    def porcentagem_ipi(self) -> Any: ...


class DuplicateHandle(Protocol):
    def numero_duplicata(self) -> Optional[str]: ...
    def vencimento_duplicata(self) -> Optional[str]: ...
    def valor_duplicata(self) -> Any: ...


class BillingHandle(Protocol):
    def nr_duplicatas(self) -> int: ...
    def duplicata(self, index: int) -> DuplicateHandle: ...


class ObservationHandle(Protocol):
    def texto(self) -> Optional[str]: ...


class VolumeHandle(Protocol):
    def quantidade_volumes(self) -> Any: ...
    def especie(self) -> Optional[str]: ...
    def marca(self) -> Optional[str]: ...
    def numeracao(self) -> Optional[str]: ...
    def peso_bruto(self) -> Any: ...
    def peso_liquido(self) -> Any: ...


class VehicleHandle(Protocol):
    def placa(self) -> Optional[str]: ...
    def uf(self) -> Optional[str]: ...
    def antt(self) -> Optional[str]: ...


class TransportHandle(Protocol):
    def volume(self) -> Optional[VolumeHandle]: ...
    def veiculo(self) -> Optional[VehicleHandle]: ...


class ServiceHandle(Protocol):
    """ISSQN totals"""

    def valor_total_servico_nao_incidente(self) -> Any: ...
    def valor_total_iss(self) -> Any: ...
    def base_calculo(self) -> Any: ...


class NFeHandle(Protocol):
    """One electronic invoice"""

    def tipo_operacao(self) -> Optional[str]: ...
    def natureza_operacao(self) -> Optional[str]: ...
    def nr_nota(self) -> Optional[str]: ...
    def serie(self) -> Optional[str]: ...
    def chave(self) -> Optional[str]: ...
    def protocolo(self) -> Optional[str]: ...
    def data_hora_recebimento(self) -> Optional[str]: ...
    def data_emissao(self) -> Optional[str]: ...
    def data_entrada_saida(self) -> Optional[str]: ...
    def emitente(self) -> Optional[PartyHandle]: ...
    def destinatario(self) -> Optional[PartyHandle]: ...
    def transportador(self) -> Optional[PartyHandle]: ...
    def total(self) -> TotalsHandle: ...
    def informacoes_fisco(self) -> Optional[str]: ...
    def informacoes_complementares(self) -> Optional[str]: ...
    def nr_observacoes(self) -> int: ...
    def observacao(self, index: int) -> ObservationHandle: ...
    def modalidade_frete(self) -> Optional[str]: ...
    def modalidade_frete_texto(self) -> Optional[str]: ...
    def nr_itens(self) -> int: ...
    def item(self, index: int) -> ItemHandle: ...
    def cobranca(self) -> Optional[BillingHandle]: ...
    def transporte(self) -> Optional[TransportHandle]: ...
    def servico(self) -> Optional[ServiceHandle]: ...
