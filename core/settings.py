# core/settings.py
import os
from decimal import Decimal
from pathlib import Path
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")  # carrega variáveis do .env

# =========================
# Segurança / Debug
# =========================
SECRET_KEY = os.getenv("SECRET_KEY", "troque-esta-chave")
DEBUG = os.getenv("DEBUG", "1") == "1"

# Em Docker, você acessa por 0.0.0.0:8000; mantenha localhost/127.0.0.1 também
ALLOWED_HOSTS = os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1,0.0.0.0,testserver").split(",")

CSRF_TRUSTED_ORIGINS = os.getenv(
    "CSRF_TRUSTED_ORIGINS",
    "http://localhost:8000,http://127.0.0.1:8000"
).split(",")

# =========================
# Apps
# =========================
INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",

    "rest_framework",

    # seus apps
    "barbearias",
    "clientes",
    "servicos",
    "produtos",
    "historico",
    "fila.apps.FilaConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "core.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "core.wsgi.application"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# =========================
# Banco de Dados (Docker-ready)
# =========================
DB_ENGINE = os.getenv("DB_ENGINE", "sqlite")

if DB_ENGINE == "postgres":
    # ⚠️ Fora do Docker, o padrão deve ser 127.0.0.1
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": os.getenv("POSTGRES_DB", "barbearia"),
            "USER": os.getenv("POSTGRES_USER", "django"),
            "PASSWORD": os.getenv("POSTGRES_PASSWORD", "secret"),
            "HOST": os.getenv("POSTGRES_HOST", "127.0.0.1"),
            "PORT": os.getenv("POSTGRES_PORT", "5432"),
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / os.getenv("DB_NAME", "db.sqlite3"),
        }
    }

# =========================
# i18n / L10n (Brasil)
# =========================
LANGUAGE_CODE = os.getenv("LANGUAGE_CODE", "pt-br")
TIME_ZONE = os.getenv("TIME_ZONE", "America/Sao_Paulo")
USE_I18N = True
USE_TZ = True

# =========================
# Arquivos estáticos
# =========================
STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"   # destino do collectstatic

# =========================
# REST Framework
# =========================
REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ] if not DEBUG else [
        "rest_framework.renderers.JSONRenderer",
        "rest_framework.renderers.BrowsableAPIRenderer",
    ],
    # erros de domínio (fila/checkout) viram respostas HTTP aqui
    "EXCEPTION_HANDLER": "core.exceptions.api_exception_handler",
}

# =========================
# Fila / notificações
# =========================
# Webhook avisado a cada evento da fila (entrada, cancelamento, conclusão).
# Vazio = notificações desligadas.
QUEUE_WEBHOOK_URL = os.getenv("QUEUE_WEBHOOK_URL", "")
QUEUE_WEBHOOK_TOKEN = os.getenv("QUEUE_WEBHOOK_TOKEN", "")
QUEUE_WEBHOOK_TIMEOUT = int(os.getenv("QUEUE_WEBHOOK_TIMEOUT", "8"))

# =========================
# Taxas de pagamento (valores iniciais da tabela de taxas)
# =========================
PAYMENT_FEE_DEFAULTS = {
    "commission_rate": Decimal(os.getenv("DEFAULT_COMMISSION_RATE", "0.15")),
    "credit_card_fee": Decimal(os.getenv("FEE_CREDIT_CARD", "0.035")),
    "credit_card_fee_2x": Decimal(os.getenv("FEE_CREDIT_CARD_2X", "0.045")),
    "credit_card_fee_3x": Decimal(os.getenv("FEE_CREDIT_CARD_3X", "0.055")),
    "debit_card_fee": Decimal(os.getenv("FEE_DEBIT_CARD", "0.025")),
}

# =========================
# Logging — útil no Docker
# =========================
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s %(levelname)s %(name)s %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "root": {
        "handlers": ["console"],
        "level": "INFO" if not DEBUG else "DEBUG",
    },
    "loggers": {
        "django.db.backends": {"level": "INFO"},
    },
}
