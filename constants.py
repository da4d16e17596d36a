"""
Constants and reference data for the Health Plan Quoter
Includes wizard steps, page configuration and help text
"""

# Application configuration
APP_CONFIG = {
    'title': 'Cotação Inteligente',
    'icon': '🩺',
    'layout': 'wide',
    'initial_sidebar_state': 'collapsed'
}

BRAND_NAME = "TEM Saúde"
BRAND_TAGLINE = "Corretora Autorizada"

# Wizard steps
STEP_TYPE_SELECTION = 'type-selection'
STEP_LIVES_SELECTION = 'lives-selection'
STEP_AGE_INPUT = 'age-input'
STEP_RESULTS = 'results'

# Help text
HELP_TEXT = {
    'age_input': """
        Adicione a quantidade de pessoas por faixa etária.
        Os valores são mensais e calculados pela tabela de cada operadora.
    """,
    'group_minor': "Adicione um adulto para prosseguir.",
    'export': "Baixe a cotação com o detalhamento por faixa etária (CSV).",
}

# Export file naming convention
EXPORT_FILE_PREFIX = "cotacao"

# Date format for exports
DATE_FORMAT = "%Y%m%d_%H%M%S"
