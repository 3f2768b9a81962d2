"""
Excel summary of a DANFE conversion batch.
"""
from pathlib import Path
from typing import List
from datetime import datetime
import pandas as pd
from openpyxl import load_workbook
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side
from openpyxl.utils import get_column_letter
from loguru import logger

from models import ProcessingResult


class ExcelReporter:
    """Generates a formatted workbook listing the converted invoices"""

    # Style definitions
    HEADER_FILL = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
    HEADER_FONT = Font(bold=True, color="FFFFFF", size=11)
    BORDER_THIN = Border(
        left=Side(style='thin'),
        right=Side(style='thin'),
        top=Side(style='thin'),
        bottom=Side(style='thin')
    )

    def __init__(self, output_dir: Path, auto_fit_columns: bool = True, freeze_header_row: bool = True):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.auto_fit_columns = auto_fit_columns
        self.freeze_header_row = freeze_header_row

    def generate_report(self, results: List[ProcessingResult]) -> Path:
        """
        Generate Excel report with one sheet, one row per input file.
        Failed conversions are listed with their error message.
        """
        if not results:
            raise ValueError("No results to generate report")

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_file = self.output_dir / f"relatorio_danfe_{timestamp}.xlsx"

        df = self._create_dataframe(results)
        with pd.ExcelWriter(output_file, engine='openpyxl') as writer:
            df.to_excel(writer, sheet_name='Notas Convertidas', index=False)

        self._apply_formatting(output_file)

        logger.info(f"Generated Excel report: {output_file}")
        return output_file

    def _create_dataframe(self, results: List[ProcessingResult]) -> pd.DataFrame:
        rows = []

        for result in results:
            doc = result.document
            rows.append({
                'Arquivo': result.filename,
                'Status': result.status.value,
                'Número': doc.numero if doc else None,
                'Série': doc.serie if doc else None,
                'Chave de Acesso': doc.chave.strip() if doc and doc.chave else None,
                'Data Emissão': doc.data_emissao if doc else None,
                'Emitente': doc.emitente.nome if doc else None,
                'Emitente CNPJ/CPF': doc.emitente.inscricao_nacional if doc else None,
                'Destinatário': doc.destinatario.nome if doc else None,
                'Destinatário CNPJ/CPF': doc.destinatario.inscricao_nacional if doc else None,
                'Valor Total': doc.total_nota if doc else None,
                'Itens': len(doc.itens) if doc else None,
                'DANFE': str(result.output_path) if result.output_path else None,
                'Erro': result.error.error_message if result.error else None,
            })

        return pd.DataFrame(rows)

    def _apply_formatting(self, excel_file: Path):
        """Apply Excel formatting (headers, column widths, filters)"""
        wb = load_workbook(excel_file)

        for ws in wb.worksheets:
            for cell in ws[1]:
                cell.font = self.HEADER_FONT
                cell.fill = self.HEADER_FILL
                cell.alignment = Alignment(horizontal='center', vertical='center')
                cell.border = self.BORDER_THIN

            if self.auto_fit_columns:
                for column in ws.columns:
                    column_letter = get_column_letter(column[0].column)
                    max_length = max((len(str(cell.value)) for cell in column if cell.value), default=0)
                    ws.column_dimensions[column_letter].width = min(max_length + 2, 50)  # Cap at 50

            ws.auto_filter.ref = ws.dimensions

            if self.freeze_header_row:
                ws.freeze_panes = 'A2'

        wb.save(excel_file)
        logger.debug(f"Applied formatting to {excel_file}")
