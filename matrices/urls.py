from django.urls import path

from core.matrix_engine import Operation
from . import views

app_name = 'matrices'

urlpatterns = [
    path('echo', views.matrix_operation, {'operation': Operation.ECHO}, name='echo'),
    path('transpose', views.matrix_operation, {'operation': Operation.TRANSPOSE}, name='transpose'),
    path('invert', views.matrix_operation, {'operation': Operation.TRANSPOSE}, name='invert'),
    path('flatten', views.matrix_operation, {'operation': Operation.FLATTEN}, name='flatten'),
    path('sum', views.matrix_operation, {'operation': Operation.SUM}, name='sum'),
    path('multiply', views.matrix_operation, {'operation': Operation.MULTIPLY}, name='multiply'),
]
