from .document_json_importer import DocumentJSONImporter, load_document

__all__ = ["DocumentJSONImporter", "load_document"]
