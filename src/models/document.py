"""
Presentation models for the DANFE template.

Every field is display-ready text. Fields that were never assigned are left
out of `to_template_data()`, so an absent party or an absent optional section
contributes no keys at all instead of placeholder values.
"""
from typing import Any, Dict, List, Optional
from enum import Enum
from pydantic import BaseModel, Field


class ProcessingStatus(str, Enum):
    """Status of a file conversion"""
    PENDING = "Pendente"
    PROCESSING = "Processando"
    COMPLETED = "Concluído"
    ERROR = "Erro"
    CANCELLED = "Cancelado"


class PresentationModel(BaseModel):
    """Base for template records: numeric accessor values are kept as text"""
    model_config = {"coerce_numbers_to_str": True}


class AddressInfo(PresentationModel):
    """Address block of a party"""
    endereco: Optional[str] = None
    numero: Optional[str] = None
    complemento: Optional[str] = None
    bairro: Optional[str] = None
    municipio: Optional[str] = None
    cep: Optional[str] = None
    uf: Optional[str] = None


class PartyInfo(AddressInfo):
    """Issuer, recipient or carrier merged with its address"""
    nome: Optional[str] = None
    fantasia: Optional[str] = None
    ie: Optional[str] = None
    ie_st: Optional[str] = None
    inscricao_municipal: Optional[str] = None
    inscricao_nacional: Optional[str] = None
    telefone: Optional[str] = None


class LineItem(PresentationModel):
    """One row of the products/services table"""
    codigo: Optional[str] = None
    descricao: Optional[str] = None
    ncm: Optional[str] = None
    cst: str = ""
    cfop: Optional[str] = None
    unidade: Optional[str] = None
    quantidade: str
    valor: str
    desconto: str
    total: str
    base_calculo: str
    icms: str
    ipi: str
    porcentagem_icms: str
    porcentagem_ipi: str


class Installment(PresentationModel):
    """One billing duplicate (duplicata)"""
    numero: Optional[str] = None
    vencimento: str
    valor: str


class PresentationDocument(PresentationModel):
    """Complete data bound by the DANFE template"""
    # Identification
    operacao: Optional[str] = None
    natureza: Optional[str] = None
    numero: Optional[str] = None
    serie: Optional[str] = None
    chave: Optional[str] = None
    protocolo: Optional[str] = None
    data_protocolo: str = ""
    data_emissao: str = ""
    data_saida: str = ""

    # Parties
    emitente: PartyInfo = Field(default_factory=PartyInfo)
    destinatario: PartyInfo = Field(default_factory=PartyInfo)
    transportador: PartyInfo = Field(default_factory=PartyInfo)

    # Totals
    base_calculo_icms: str = ""
    imposto_icms: str = ""
    base_calculo_icms_st: str = ""
    imposto_icms_st: str = ""
    imposto_tributos: str = ""
    total_produtos: str = ""
    total_frete: str = ""
    total_seguro: str = ""
    total_desconto: str = ""
    total_despesas: str = ""
    total_ipi: str = ""
    total_nota: str = ""

    # Additional information
    informacoes_fisco: Optional[str] = None
    informacoes_complementares: Optional[str] = None
    observacao: str = ""
    modalidade_frete: Optional[str] = None
    modalidade_frete_texto: Optional[str] = None

    itens: List[LineItem] = Field(default_factory=list)
    duplicatas: List[Installment] = Field(default_factory=list)

    # Optional sections, only assigned when the document carries them
    volume_quantidade: Optional[str] = None
    volume_especie: Optional[str] = None
    volume_marca: Optional[str] = None
    volume_numeracao: Optional[str] = None
    volume_pesoBruto: Optional[str] = None
    volume_pesoLiquido: Optional[str] = None

    veiculo_placa: Optional[str] = None
    veiculo_placa_uf: Optional[str] = None
    veiculo_antt: Optional[str] = None

    total_servico: Optional[str] = None
    total_issqn: Optional[str] = None
    base_calculo_issqn: Optional[str] = None

    def model_dump(self, **kwargs) -> Dict[str, Any]:
        # absent sections stay absent unless the caller asks otherwise
        kwargs.setdefault("exclude_unset", True)
        return super().model_dump(**kwargs)

    def to_template_data(self) -> Dict[str, Any]:
        """Plain dict with only the assigned fields, ready for the template"""
        return self.model_dump(exclude_unset=True)
