from .domain_event import DomainEvent as DomainEvent
