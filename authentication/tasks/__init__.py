from .notification_tasks import send_seller_status_email_task


__all__ = ["send_seller_status_email_task"]
