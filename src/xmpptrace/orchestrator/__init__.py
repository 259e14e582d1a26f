from .ingestor import iter_packets, read_packets, packets_to_dataframe

__all__ = ["iter_packets", "read_packets", "packets_to_dataframe"]
