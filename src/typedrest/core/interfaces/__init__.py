"""Interfaces/abstracciones del Core.

Contratos (Protocol) que implementan los modelos del llamador y los
adaptadores concretos (transporte HTTP, esquemas de credenciales).
"""
