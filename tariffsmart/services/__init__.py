"""
Application Services

Pure business logic used by the web views:
    from tariffsmart.services.tariff_calculator import estimate_impact
    from tariffsmart.services.quiz_scoring import grade_quiz
"""
