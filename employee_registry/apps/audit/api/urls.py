from django.urls import path

from .views import EmployeeUpdateLogView, ManagerLogView

urlpatterns = [
    path('manager-logs/', ManagerLogView.as_view(), name='manager-logs'),
    path('employee-update-logs/', EmployeeUpdateLogView.as_view(), name='employee-update-logs'),
]
