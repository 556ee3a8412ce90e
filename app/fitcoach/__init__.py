"""FitCoach localization layer.

Locale detection, translation catalogs and message interpolation for the
trainer/client management UI.
"""
