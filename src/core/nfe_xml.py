"""
NF-e XML reader.

Implements the NFeHandle accessor surface over an NF-e 4.0 XML document
(`nfeProc` with protocol, or a bare `NFe`), using ElementTree.

Structure used:

    <nfeProc>
        <NFe>
            <infNFe Id="NFe...">
                <ide>...</ide>           # number, series, dates
                <emit>...</emit>         # issuer + enderEmit
                <dest>...</dest>         # recipient + enderDest
                <det nItem="1">...</det> # one per line item
                <total>...</total>       # ICMSTot, ISSQNtot
                <transp>...</transp>     # carrier, vehicle, volumes
                <cobr>...</cobr>         # invoice + duplicates
                <infAdic>...</infAdic>   # additional information
            </infNFe>
        </NFe>
        <protNFe><infProt>...</infProt></protNFe>
    </nfeProc>
"""
import xml.etree.ElementTree as ET
from typing import Dict, List, Optional, Union
from loguru import logger


# transp/modFrete
MODALIDADES_FRETE = {
    "0": "Contratação do Frete por conta do Remetente (CIF)",
    "1": "Contratação do Frete por conta do Destinatário (FOB)",
    "2": "Contratação do Frete por conta de Terceiros",
    "3": "Transporte Próprio por conta do Remetente",
    "4": "Transporte Próprio por conta do Destinatário",
    "9": "Sem Ocorrência de Transporte",
}


def _strip_namespaces(root: ET.Element) -> None:
    """Documents come with or without the portalfiscal namespace"""
    for element in root.iter():
        if isinstance(element.tag, str) and element.tag.startswith("{"):
            element.tag = element.tag.split("}", 1)[1]


class XmlNode:
    """Base wrapper with None-safe lookups"""

    def __init__(self, element: ET.Element):
        self.element = element

    def _text(self, *paths: str) -> Optional[str]:
        """Text of the first path that has content, None otherwise"""
        for path in paths:
            found = self.element.find(path)
            if found is not None and found.text and found.text.strip():
                return found.text.strip()
        return None

    def _find(self, path: str) -> Optional[ET.Element]:
        return self.element.find(path)


class AddressXml(XmlNode):
    """Address group. Tag names vary between parties, hence the field map."""

    DEFAULT_FIELDS = {
        "logradouro": "xLgr",
        "numero": "nro",
        "complemento": "xCpl",
        "bairro": "xBairro",
        "municipio": "xMun",
        "cep": "CEP",
        "uf": "UF",
    }

    def __init__(self, element: ET.Element, fields: Optional[Dict[str, str]] = None):
        super().__init__(element)
        self.fields = fields or self.DEFAULT_FIELDS

    def _field(self, name: str) -> Optional[str]:
        tag = self.fields.get(name)
        return self._text(tag) if tag else None

    def logradouro(self): return self._field("logradouro")
    def numero(self): return self._field("numero")
    def complemento(self): return self._field("complemento")
    def bairro(self): return self._field("bairro")
    def municipio(self): return self._field("municipio")
    def cep(self): return self._field("cep")
    def uf(self): return self._field("uf")


class PartyXml(XmlNode):
    """emit / dest"""

    def __init__(self, element: ET.Element, address_tag: str):
        super().__init__(element)
        self.address_tag = address_tag

    def nome(self): return self._text("xNome")
    def fantasia(self): return self._text("xFant")
    def inscricao_estadual(self): return self._text("IE")
    def inscricao_estadual_st(self): return self._text("IEST")
    def inscricao_municipal(self): return self._text("IM")
    def inscricao_nacional(self): return self._text("CNPJ", "CPF", "idEstrangeiro")
    def telefone(self): return self._text(f"{self.address_tag}/fone")

    def endereco(self) -> Optional[AddressXml]:
        address = self._find(self.address_tag)
        return AddressXml(address) if address is not None else None


class CarrierXml(PartyXml):
    """transp/transporta - the carrier address is flat on the element"""

    CARRIER_ADDRESS = {"logradouro": "xEnder", "municipio": "xMun", "uf": "UF"}

    def __init__(self, element: ET.Element):
        super().__init__(element, address_tag="")

    def telefone(self): return None

    def endereco(self) -> AddressXml:
        return AddressXml(self.element, self.CARRIER_ADDRESS)


class TotalsXml(XmlNode):
    """total/ICMSTot"""

    def base_calculo_icms(self): return self._text("vBC")
    def valor_icms(self): return self._text("vICMS")
    def base_calculo_icms_st(self): return self._text("vBCST")
    def valor_icms_st(self): return self._text("vST")
    def valor_total_tributos(self): return self._text("vTotTrib")
    def valor_produtos(self): return self._text("vProd")
    def valor_frete(self): return self._text("vFrete")
    def valor_seguro(self): return self._text("vSeg")
    def valor_desconto(self): return self._text("vDesc")
    def valor_outras_despesas(self): return self._text("vOutro")
    def valor_ipi(self): return self._text("vIPI")
    def valor_nota(self): return self._text("vNF")


class ItemXml(XmlNode):
    """One det element"""

    def __init__(self, element: ET.Element):
        super().__init__(element)
        # ICMS comes in one of many groups (ICMS00, ICMS20, ICMSSN102, ...)
        icms_group = element.find("imposto/ICMS")
        self._icms = XmlNode(icms_group[0]) if icms_group is not None and len(icms_group) else None
        self._ipi = element.find("imposto/IPI/IPITrib")

    def _icms_text(self, *tags: str) -> Optional[str]:
        return self._icms._text(*tags) if self._icms else None

    def _ipi_text(self, tag: str) -> Optional[str]:
        return XmlNode(self._ipi)._text(tag) if self._ipi is not None else None

    def codigo(self): return self._text("prod/cProd")
    def descricao(self): return self._text("prod/xProd")
    def ncm(self): return self._text("prod/NCM")
    def origem(self): return self._icms_text("orig")
    def cst(self): return self._icms_text("CST", "CSOSN")
    def cfop(self): return self._text("prod/CFOP")
    def unidade_comercial(self): return self._text("prod/uCom")
    def quantidade_comercial(self): return self._text("prod/qCom")
    def valor_unitario(self): return self._text("prod/vUnCom")
    def valor_desconto(self): return self._text("prod/vDesc")
    def valor_produtos(self): return self._text("prod/vProd")
    def base_calculo_icms(self): return self._icms_text("vBC")
    def valor_icms(self): return self._icms_text("vICMS")
    def valor_ipi(self): return self._ipi_text("vIPI")
    def porcentagem_icms(self): return self._icms_text("pICMS")
    def porcentagem_ipi(self): return self._ipi_text("pIPI")


class DuplicateXml(XmlNode):
    """cobr/dup"""

    def numero_duplicata(self): return self._text("nDup")
    def vencimento_duplicata(self): return self._text("dVenc")
    def valor_duplicata(self): return self._text("vDup")


class BillingXml(XmlNode):
    """cobr"""

    def __init__(self, element: ET.Element):
        super().__init__(element)
        self._duplicates = element.findall("dup")

    def nr_duplicatas(self) -> int:
        return len(self._duplicates)

    def duplicata(self, index: int) -> DuplicateXml:
        return DuplicateXml(self._duplicates[index - 1])


class ObservationXml(XmlNode):
    """infAdic/obsCont"""

    def texto(self): return self._text("xTexto")


class VolumeXml(XmlNode):
    """transp/vol"""

    def quantidade_volumes(self): return self._text("qVol")
    def especie(self): return self._text("esp")
    def marca(self): return self._text("marca")
    def numeracao(self): return self._text("nVol")
    def peso_bruto(self): return self._text("pesoB")
    def peso_liquido(self): return self._text("pesoL")


class VehicleXml(XmlNode):
    """transp/veicTransp"""

    def placa(self): return self._text("placa")
    def uf(self): return self._text("UF")
    def antt(self): return self._text("RNTC")


class TransportXml(XmlNode):
    """transp"""

    def volume(self) -> Optional[VolumeXml]:
        vol = self._find("vol")
        return VolumeXml(vol) if vol is not None else None

    def veiculo(self) -> Optional[VehicleXml]:
        vehicle = self._find("veicTransp")
        return VehicleXml(vehicle) if vehicle is not None else None


class ServiceXml(XmlNode):
    """total/ISSQNtot"""

    def valor_total_servico_nao_incidente(self): return self._text("vServ")
    def valor_total_iss(self): return self._text("vISS")
    def base_calculo(self): return self._text("vBC")


class NFeXml(XmlNode):
    """
    One NF-e, wrapping its infNFe element and, when present, the
    authorization protocol (protNFe/infProt).
    """

    def __init__(self, inf_nfe: ET.Element, inf_prot: Optional[ET.Element] = None):
        super().__init__(inf_nfe)
        self.protocol = XmlNode(inf_prot) if inf_prot is not None else None
        self._items: List[ET.Element] = inf_nfe.findall("det")
        self._observations: List[ET.Element] = inf_nfe.findall("infAdic/obsCont")

    def _protocol_text(self, tag: str) -> Optional[str]:
        return self.protocol._text(tag) if self.protocol else None

    # Identification
    def tipo_operacao(self): return self._text("ide/tpNF")
    def natureza_operacao(self): return self._text("ide/natOp")
    def nr_nota(self): return self._text("ide/nNF")
    def serie(self): return self._text("ide/serie")
    def data_emissao(self): return self._text("ide/dhEmi", "ide/dEmi")
    def data_entrada_saida(self): return self._text("ide/dhSaiEnt", "ide/dSaiEnt")

    def chave(self) -> Optional[str]:
        nfe_id = self.element.get("Id", "")
        if nfe_id.startswith("NFe"):
            return nfe_id[3:]
        return nfe_id or self._protocol_text("chNFe")

    # Authorization protocol
    def protocolo(self): return self._protocol_text("nProt")
    def data_hora_recebimento(self): return self._protocol_text("dhRecbto")

    # Parties
    def emitente(self) -> Optional[PartyXml]:
        emit = self._find("emit")
        return PartyXml(emit, "enderEmit") if emit is not None else None

    def destinatario(self) -> Optional[PartyXml]:
        dest = self._find("dest")
        return PartyXml(dest, "enderDest") if dest is not None else None

    def transportador(self) -> Optional[CarrierXml]:
        carrier = self._find("transp/transporta")
        return CarrierXml(carrier) if carrier is not None else None

    # Totals
    def total(self) -> TotalsXml:
        totals = self._find("total/ICMSTot")
        return TotalsXml(totals if totals is not None else ET.Element("ICMSTot"))

    def servico(self) -> Optional[ServiceXml]:
        issqn = self._find("total/ISSQNtot")
        return ServiceXml(issqn) if issqn is not None else None

    # Additional information
    def informacoes_fisco(self): return self._text("infAdic/infAdFisco")
    def informacoes_complementares(self): return self._text("infAdic/infCpl")

    def nr_observacoes(self) -> int:
        return len(self._observations)

    def observacao(self, index: int) -> ObservationXml:
        return ObservationXml(self._observations[index - 1])

    # Transport
    def modalidade_frete(self): return self._text("transp/modFrete")

    def modalidade_frete_texto(self) -> Optional[str]:
        return MODALIDADES_FRETE.get(self.modalidade_frete() or "")

    def transporte(self) -> Optional[TransportXml]:
        transp = self._find("transp")
        return TransportXml(transp) if transp is not None else None

    # Items and billing
    def nr_itens(self) -> int:
        return len(self._items)

    def item(self, index: int) -> ItemXml:
        return ItemXml(self._items[index - 1])

    def cobranca(self) -> Optional[BillingXml]:
        cobr = self._find("cobr")
        return BillingXml(cobr) if cobr is not None else None


def parse(xml: Union[str, bytes]) -> Optional[NFeXml]:
    """
    Parse NF-e XML text.

    Returns:
        NFeXml handle, or None when the text is not XML or not an NF-e
    """
    try:
        root = ET.fromstring(xml)
    except ET.ParseError as e:
        logger.error(f"Invalid NF-e XML: {e}")
        return None

    _strip_namespaces(root)

    inf_nfe = root if root.tag == "infNFe" else root.find(".//infNFe")
    if inf_nfe is None:
        logger.error(f"No infNFe element found (root element: {root.tag})")
        return None

    inf_prot = root.find(".//protNFe/infProt")
    nfe = NFeXml(inf_nfe, inf_prot)
    logger.debug(f"Parsed NF-e {nfe.nr_nota()} with {nfe.nr_itens()} items")
    return nfe
