# app/__init__.py
"""
API de media compartida: creadores suben fotos/videos, el resto navega
el feed, comenta y califica.

En Windows forzamos el Proactor event loop para que uvicorn --reload no
rompa los sockets en el proceso hijo.
"""

import sys
import asyncio

if sys.platform.startswith("win") and hasattr(asyncio, "WindowsProactorEventLoopPolicy"):
    asyncio.set_event_loop_policy(asyncio.WindowsProactorEventLoopPolicy())
