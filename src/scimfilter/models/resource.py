from tortoise import fields
from tortoise.models import Model


class ScimResource(Model):
    """
    One SCIM User or Group, scoped to an endpoint (tenant).

    The serialized resource lives in ``payload``; the remaining columns are
    copies of the attributes that filters may be pushed down to.
    """
    id = fields.UUIDField(pk=True)
    endpoint_id = fields.CharField(max_length=255, index=True)
    resource_type = fields.CharField(max_length=50)

    scim_id = fields.CharField(max_length=255)
    external_id = fields.CharField(max_length=255, null=True)
    user_name = fields.CharField(max_length=255, null=True)
    display_name = fields.CharField(max_length=255, null=True)

    # Push-down columns: lowercased copies, matched exactly
    scim_id_lower = fields.CharField(max_length=255, index=True)
    external_id_lower = fields.CharField(max_length=255, null=True, index=True)
    user_name_lower = fields.CharField(max_length=255, null=True, index=True)
    display_name_lower = fields.CharField(max_length=255, null=True, index=True)

    payload = fields.JSONField(default=dict)

    # Metadata
    created = fields.DatetimeField(auto_now_add=True)
    modified = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "scim_resources"
        unique_together = (("endpoint_id", "resource_type", "scim_id"),)

    def __str__(self):
        return f"{self.resource_type} {self.scim_id} ({self.endpoint_id})"
