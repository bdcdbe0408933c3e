from .availability_checker import AvailabilityChecker as AvailabilityChecker
