"""
cqbot - asyncio bridge between a CQHTTP / OneBot gateway and chat handlers.
"""

__version__ = "0.1.0"
__logo__ = "🐧"
