from carnival.guests.service import GuestService, RegistrationError

__all__ = ["GuestService", "RegistrationError"]
