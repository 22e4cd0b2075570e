from iesrescale.export.ies_writer import SerializeError, format_float, record_to_lines, serialize_record

__all__ = ["SerializeError", "format_float", "record_to_lines", "serialize_record"]
