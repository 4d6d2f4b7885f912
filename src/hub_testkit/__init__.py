"""
Hub TestKit Task Collection
"""

from invoke import Collection

# Create namespace and collect tasks from each submodule
namespace = Collection()

from .tasks import hub

for task_name, task in Collection.from_module(hub).tasks.items():
    namespace.add_task(task)
