"""
Encounterbrew - Directive text engine for tabletop encounter descriptions.

Turns game-data description strings (monster abilities, spell text, item
traits) written in the compendium markup dialect into display prose:
- Pattern rewriting of dice, check, template and cross-reference directives
- Localization placeholder resolution against a nested JSON document
- Small formatting helpers shared by the rendering layer
"""

__version__ = "0.1.0"
