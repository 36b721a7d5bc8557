from django.urls import include, path

urlpatterns = [
    path("", include("modules.core.urls")),
    path("", include("modules.accounts.urls")),
    path("", include("modules.products.urls")),
]

# Unmatched routes and failures outside DRF still answer with an error
# document in the negotiated format.
handler404 = "modules.core.views.not_found"
handler500 = "modules.core.views.server_error"
