"""Adaptadores de I/O: transporte httpx, codec JSON y credenciales."""
