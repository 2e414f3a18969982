# core/urls.py
from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),

    # -------- API --------
    path("api/fila/", include(("fila.api_urls", "api_fila"))),
    path("api/historico/", include(("historico.api_urls", "api_historico"))),
    path("api/servicos/", include(("servicos.api_urls", "api_servicos"))),
    path("api/produtos/", include(("produtos.api_urls", "api_produtos"))),
    path("api/clientes/", include(("clientes.api_urls", "api_clientes"))),
    path("api/", include(("barbearias.api_urls", "api_barbearias"))),
]
