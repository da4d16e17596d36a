"""
UI Components for the quoting wizard.

Each component is a Streamlit-based function that renders one portion of a
wizard step. app.py composes them and owns navigation between steps.
"""

from .category_selection import render_category_selection, render_lives_selection
from .age_selector import render_age_selector
from .alerts import render_limit_warning, render_notice, render_notices
from .plan_card import render_plan_card
from .contact_button import render_contact_button, whatsapp_url

__all__ = [
    'render_category_selection',
    'render_lives_selection',
    'render_age_selector',
    'render_limit_warning',
    'render_notice',
    'render_notices',
    'render_plan_card',
    'render_contact_button',
    'whatsapp_url',
]
