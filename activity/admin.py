from django.contrib import admin

from .models import ClickLog, SearchLog


@admin.register(SearchLog)
class SearchLogAdmin(admin.ModelAdmin):
    list_display = ('query', 'results_count', 'user', 'created_at')
    search_fields = ('query',)
    readonly_fields = ('query', 'results_count', 'user', 'created_at')


@admin.register(ClickLog)
class ClickLogAdmin(admin.ModelAdmin):
    list_display = ('product', 'source', 'user', 'created_at')
    list_filter = ('source',)
    readonly_fields = ('product', 'source', 'user', 'created_at')
