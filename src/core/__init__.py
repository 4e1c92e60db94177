"""Core: dominio, contratos y servicios puros del resolver.

No conoce Typer ni Rich; solo depende de `adapters` para abrir el cliente
de Jira cuando el harness no inyecta uno.
"""
