# accounts/__init__.py
"""
Accounts app - Users, tenants and grants.

This app provides:
- User: Custom user model (email login, soft-deletable)
- Company: Tenant model, including the protected sentinel company
- Grant: (user, target kind, target id) authorization records
- ActorContext: Authorization context and capability resolver
- Provisioning: Company access for newly registered users

Access to tenant data is decided at every layer through the ActorContext pattern.
"""
