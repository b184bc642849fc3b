"""BlueMoon Portal package.

Web portal for the BlueMoon residential community. The package is organized by
feature modules (households, fees, payments, ...) with a thin Flask controller
layer, service classes holding the business rules and repositories that talk
to the BlueMoon REST server through a shared API client.
"""
