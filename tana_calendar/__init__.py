"""
Tana ⇄ Google Calendar event sync service.

Точка входа ASGI: ``tana_calendar.main:app``.
"""
