"""
File handling utilities for NF-e XML files and ZIP archives.
"""
from pathlib import Path
from typing import List, Tuple
import zipfile
from loguru import logger


class FileValidator:
    """Validates file types and formats"""

    ZIP_MAGIC = b'PK\x03\x04'
    XML_SUFFIX = ".xml"

    @staticmethod
    def is_xml_name(filename: str) -> bool:
        return filename.lower().endswith(FileValidator.XML_SUFFIX)

    @staticmethod
    def is_zip(file_path: Path) -> bool:
        """Check if file is a valid ZIP"""
        try:
            with open(file_path, 'rb') as f:
                header = f.read(4)
                return header == FileValidator.ZIP_MAGIC
        except OSError as e:
            logger.error(f"Error checking ZIP: {file_path} - {e}")
            return False

    @staticmethod
    def validate_file(file_path: Path) -> Tuple[bool, str]:
        """
        Validate if input is supported (XML, ZIP or directory).
        Returns (is_valid, file_type)
        """
        if not file_path.exists():
            return False, "File does not exist"

        if file_path.is_dir():
            return True, "DIR"

        if FileValidator.is_xml_name(file_path.name):
            return True, "XML"

        if FileValidator.is_zip(file_path):
            return True, "ZIP"

        return False, "Unsupported file type"


class ZIPExtractor:
    """Extracts XML files from ZIP archives in-memory"""

    @staticmethod
    def extract_xmls(zip_path: Path) -> List[Tuple[str, bytes]]:
        """
        Extract all XML files from a ZIP archive.
        Returns list of (filename, xml_bytes) tuples.
        """
        xmls = []

        try:
            with zipfile.ZipFile(zip_path, 'r') as zip_ref:
                for file_info in zip_ref.infolist():
                    if file_info.is_dir() or not FileValidator.is_xml_name(file_info.filename):
                        continue

                    clean_filename = Path(file_info.filename).name
                    xmls.append((clean_filename, zip_ref.read(file_info)))
                    logger.debug(f"Extracted XML from ZIP: {clean_filename}")

            logger.info(f"Extracted {len(xmls)} XMLs from {zip_path.name}")

        except zipfile.BadZipFile:
            logger.error(f"Invalid ZIP file: {zip_path}")

        return xmls


class FileHandler:
    """High-level file handling operations"""

    @staticmethod
    def _read(file_path: Path) -> List[Tuple[str, bytes]]:
        try:
            return [(file_path.name, file_path.read_bytes())]
        except OSError as e:
            logger.error(f"Error reading XML {file_path}: {e}")
            return []

    @staticmethod
    def prepare_files_for_processing(file_paths: List[Path]) -> List[Tuple[str, bytes]]:
        """
        Prepare files for processing.
        Handles XML files, folders of XML files (non-recursive) and ZIPs
        containing XMLs. Returns list of (filename, xml_bytes) tuples.
        """
        files_to_process = []

        for file_path in map(Path, file_paths):
            is_valid, file_type = FileValidator.validate_file(file_path)

            if not is_valid:
                logger.warning(f"Skipping invalid file: {file_path} - {file_type}")
                continue

            if file_type == "XML":
                files_to_process.extend(FileHandler._read(file_path))

            elif file_type == "DIR":
                for child in sorted(file_path.iterdir()):
                    if child.is_file() and FileValidator.is_xml_name(child.name):
                        files_to_process.extend(FileHandler._read(child))

            elif file_type == "ZIP":
                files_to_process.extend(ZIPExtractor.extract_xmls(file_path))

        logger.info(f"Prepared {len(files_to_process)} files for processing")
        return files_to_process
