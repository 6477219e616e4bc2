from django.contrib import admin

from .models import Message


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ('id', 'sender', 'receiver', 'product', 'is_read', 'created_at')
    list_filter = ('is_read', 'created_at')
    search_fields = ('content', 'sender__email', 'receiver__email', 'product__title')
    readonly_fields = ('id', 'created_at')

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('sender', 'receiver', 'product')
