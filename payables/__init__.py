"""
Contas a Pagar API: accounts-payable ingestion service.
"""
__version__ = "0.1.0"
