from ..results import ToolOk
from .base import TaskTool


class ListUsersTool(TaskTool):
    name = "list_users"
    description = (
        "List active team members with their email and role. Use it to find "
        "who a task can be assigned to."
    )

    def run(self, user, args):
        return ToolOk([
            {
                "id": member.id,
                "name": member.name,
                "email": member.email,
                "role": member.role,
            }
            for member in self.store.active_users()
        ])
