"""Service layer — query operations returning ServiceResult envelopes."""
