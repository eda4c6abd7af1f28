# run_dev.py
import os
import sys
import asyncio
import socket

from dotenv import load_dotenv


# 1) Proactor también aquí (por si corres este script directo en Windows)
if sys.platform.startswith("win"):
    asyncio.set_event_loop_policy(asyncio.WindowsProactorEventLoopPolicy())

# 2) Carga .env si existe
if os.path.exists(".env"):
    load_dotenv(".env")


def _lan_ip() -> str:
    """IP LAN real sin depender de hostname/DNS."""
    s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        s.connect(("8.8.8.8", 80))
        return s.getsockname()[0]
    except OSError:
        return "127.0.0.1"
    finally:
        s.close()


def main():
    import uvicorn

    app_module = os.getenv("APP_MODULE", "app.main:app")
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))

    # RELOAD=1/0 manda; por defecto ON salvo en Windows
    reload_env = os.getenv("RELOAD")
    if reload_env is not None:
        reload_flag = reload_env.strip().lower() in ("1", "true", "yes", "on")
    else:
        reload_flag = not sys.platform.startswith("win")

    print(f"🔗 API local: http://127.0.0.1:{port}")
    print(f"📱 API LAN:   http://{_lan_ip()}:{port}")
    print(f"🌀 reload={'ON' if reload_flag else 'OFF'}")

    uvicorn.run(
        app_module,
        host=host,
        port=port,
        loop="asyncio",
        reload=reload_flag,
        reload_dirs=["app"],
        reload_excludes=[".venv", ".git", "__pycache__", "media"],
        timeout_keep_alive=30,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()
