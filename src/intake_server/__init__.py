"""intake_server — FastAPI REST API for the intake form SDK.

Exposes the template catalogue, server-side validation of response maps,
and render plans.  Submissions are validated here but persisted elsewhere.
"""
