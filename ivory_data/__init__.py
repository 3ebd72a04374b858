"""Pipeline de dados do Tower of Ivory: texto do cliente -> JSON do site."""

__version__ = "0.1.0"
