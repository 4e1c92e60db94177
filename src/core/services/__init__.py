"""Servicios del resolver: parser, retriever, extractores, builder y entry point."""
