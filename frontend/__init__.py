"""
TalentHub frontend - Flask proxy for paginated listings plus the async
list controller, pager and notification helpers used by list views.
"""
