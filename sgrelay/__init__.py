"""Keyed sorted lists, bounded byte queues, CRC-16 dialog files, argument parsing, socket and worker-thread helpers."""

__version__ = "1.12.0"
__all__ = ["cmdline", "files", "platform_port", "sgdialog", "sglist", "sgqueue", "workers"]