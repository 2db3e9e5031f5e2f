"""
Fleet Rental Manager (Gestionale Noleggio)

Back-office per il noleggio di una flotta di veicoli: registro dei
noleggi, avvisi di scadenza, contabilità ed export CSV/PDF.
"""

__version__ = "1.0.0"
