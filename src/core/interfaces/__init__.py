"""Interfaces/abstracciones del Core.

Por qué:
- Define el contrato (Protocol) del buscador de issues que implementa el adaptador HTTP.
- Permite invertir dependencias: el retriever depende de la abstracción, no de httpx.
"""
