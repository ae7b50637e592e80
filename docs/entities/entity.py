entity_create_description = """
Create a participant or target.

### Path

- `entity_type`: `participant` or `target`

### Request Body

- `id`: Entity id (Optional, generated when omitted)
- `attributes`: Free-form attributes. Recognised keys:
    - participants: `name`, `group`, `skills` (list), `availability` (bool or per-day map)
    - targets: `name`, `required_count` (positive integer), `required_skills` (list), `allowed_groups` (list), `cooldown` (`"last"` or `"window"`)

### Example Request

```json
{
    "attributes": {"name": "Ward A", "required_count": 2, "allowed_groups": ["1"]}
}
```
"""

entity_update_description = """
Merge the given attributes into an existing entity. Keys not present in the request are kept.
"""

entity_delete_description = """
Deactivate an entity. Inactive entities are no longer listed or assigned.
"""

history_description = """
Return the recent assignment history: participant id mapped to target names, most recent first.
"""
