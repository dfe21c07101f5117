# ==============================================================================
# WSGI Entry Point - Para Gunicorn en producción
# ==============================================================================
# USO:
#   gunicorn wsgi:app --bind 0.0.0.0:$PORT
#
# ESTRUCTURA DEL PROYECTO:
#   repo_root/           <- Directorio de trabajo
#   ├── wsgi.py          <- Este archivo
#   ├── pyproject.toml
#   └── app_caisse/      <- Paquete Python
#       ├── main.py
#       ├── services/
#       └── repositories/
# ==============================================================================

from app_caisse.config import load_settings
from app_caisse.main import create_app

app = create_app()

if __name__ == '__main__':
    settings = load_settings()
    app.run(debug=True, host=settings.host, port=settings.port)
