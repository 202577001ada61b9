"""
Módulo de componentes visuales
"""
from .cards import warning_card, warnings_dataframe, level_label, section_title, render_grid
from .sidebar import render_sidebar

__all__ = [
    'warning_card',
    'warnings_dataframe',
    'level_label',
    'section_title',
    'render_grid',
    'render_sidebar',
]
