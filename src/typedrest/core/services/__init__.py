"""Orquestación: construcción de peticiones y fachada del cliente."""
