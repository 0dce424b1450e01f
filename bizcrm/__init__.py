"""Business CRM service package."""
