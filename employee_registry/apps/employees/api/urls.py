from django.urls import include, path
from rest_framework.routers import SimpleRouter
from rest_framework_simplejwt.views import TokenObtainPairView

from .views import EmployeeViewSet

router = SimpleRouter()
router.register(r'', EmployeeViewSet, basename='employee')

urlpatterns = [
    path('login/', TokenObtainPairView.as_view(), name='employee-login'),
    path('', include(router.urls)),
]
