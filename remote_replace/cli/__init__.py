"""
Command-line layer: the Typer application and Rich console formatting.
"""
