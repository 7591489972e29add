"""Components layer - domain logic building blocks.

Components are leaf modules that:
- Do NOT import services, workflows, or interfaces
- ARE imported and used BY workflows and services
- May import from: helpers, other components

Architecture:
- helpers/ = exceptions, DTOs, small stateless utilities
- components/ = build stamping and monitor building blocks (this layer)
- workflows/ = ordered orchestration of components
- services/ = long-lived resources (config, the freshness monitor)
- interfaces/ = CLI and HTTP presentation
"""
