"""
Tests for DANFE HTML rendering.
"""
import unittest
from datetime import timezone
from pathlib import Path
import tempfile
import sys

# Add src and tests to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent))

from core.renderer import Danfe, render_html
from fakes import make_nfe, make_billing, make_item

FIXTURES = Path(__file__).parent / "fixtures"


class TestRenderHtml(unittest.TestCase):

    def test_no_data(self):
        self.assertEqual(render_html(None), "")
        self.assertEqual(render_html({}), "")

    def test_custom_template(self):
        with tempfile.TemporaryDirectory() as tmp:
            template = Path(tmp) / "mini.html"
            template.write_text("<p>{{ numero }}|{{ natureza }}|{{ ausente }}</p>", encoding="utf-8")
            html = render_html({"numero": "10", "natureza": None}, template)
        self.assertEqual(html, "<p>10||</p>")


class TestDanfeInvalidSources(unittest.TestCase):
    """Invalid sources render nothing"""

    def test_from_nfe_invalid(self):
        for source in [None, "", object(), {"nr_nota": "1"}]:
            with self.subTest(source=source):
                danfe = Danfe.from_nfe(source)
                self.assertFalse(danfe.is_valid)
                self.assertIsNone(danfe.data())
                self.assertEqual(danfe.to_html(), "")

    def test_from_xml_invalid(self):
        for source in [None, "", 123, b"<NFe/>", "not xml", "<root/>"]:
            with self.subTest(source=source):
                self.assertEqual(Danfe.from_xml(source).to_html(), "")


class TestDanfeFromNFe(unittest.TestCase):

    def setUp(self):
        self.html = Danfe.from_nfe(make_nfe(), tz=timezone.utc).to_html()

    def test_document_structure(self):
        self.assertTrue(self.html.startswith("<!DOCTYPE html>"))
        self.assertIn("DOCUMENTO AUXILIAR DA NOTA FISCAL ELETRÔNICA", self.html)

    def test_fields_are_bound(self):
        self.assertIn("EMPRESA EMITENTE LTDA", self.html)
        self.assertIn("3523 0512 3456 7800 0199 5500 1000 0012 3410 0001 2345", self.html)
        self.assertIn("135230000000001 - 09/05/2023 13:20:30", self.html)
        self.assertIn("1.234.567,89", self.html)
        self.assertIn("123.456.789-01", self.html)

    def test_duplicates_section(self):
        self.assertIn("FATURA/DUPLICATAS", self.html)
        self.assertIn("09/06/2023", self.html)

    def test_duplicates_section_hidden_without_duplicates(self):
        html = Danfe.from_nfe(make_nfe(cobranca=make_billing([]))).to_html()
        self.assertNotIn("FATURA/DUPLICATAS", html)

    def test_issqn_section_only_with_service(self):
        self.assertNotIn("CÁLCULO DO ISSQN", self.html)

    def test_missing_values_render_blank(self):
        html = Danfe.from_nfe(make_nfe(natureza_operacao=None, transportador=None)).to_html()
        self.assertNotIn("None", html)

    def test_values_are_escaped(self):
        html = Danfe.from_nfe(make_nfe(items=[make_item(descricao="PORCA <M8> & ARRUELA")])).to_html()
        self.assertIn("PORCA &lt;M8&gt; &amp; ARRUELA", html)


class TestDanfeFromXml(unittest.TestCase):
    """Full pipeline from XML text"""

    def setUp(self):
        xml = (FIXTURES / "nfe_exemplo.xml").read_text(encoding="utf-8")
        self.danfe = Danfe.from_xml(xml, tz=timezone.utc)
        self.data = self.danfe.data()

    def test_template_data(self):
        self.assertEqual(self.data["numero"], "1234")
        self.assertEqual(self.data["data_emissao"], "09/05/2023")
        self.assertEqual(self.data["data_saida"], "10/05/2023")
        self.assertEqual(self.data["data_protocolo"], "09/05/2023 13:20:30")
        self.assertEqual(self.data["total_nota"], "1.312,50")
        self.assertEqual(self.data["emitente"]["inscricao_nacional"], "12.345.678/0001-99")
        self.assertEqual(self.data["transportador"]["inscricao_nacional"], "98.765.432/0001-10")
        self.assertEqual(self.data["observacao"], "\nVENDEDOR: MARIA\nENTREGAR NO PERIODO DA MANHA")

    def test_items(self):
        first, second = self.data["itens"]
        self.assertEqual(first["cst"], "000")
        self.assertEqual(first["quantidade"], "1.500,0000")
        self.assertEqual(first["porcentagem_icms"], "18,00")
        self.assertEqual(second["cst"], "1102")
        self.assertEqual(second["icms"], "0,0000")
        self.assertEqual(second["porcentagem_ipi"], "0,00")

    def test_optional_sections(self):
        self.assertEqual(self.data["volume_quantidade"], "3,0000")
        self.assertEqual(self.data["volume_pesoBruto"], "125,0000")
        self.assertEqual(self.data["veiculo_placa"], "ABC1D23")
        self.assertNotIn("total_servico", self.data)

    def test_html(self):
        html = self.danfe.to_html()
        self.assertIn("PARAFUSO SEXTAVADO &amp; PORCA", html)
        self.assertIn("TRANSPORTES RAPIDOS SA", html)


if __name__ == '__main__':
    unittest.main()
