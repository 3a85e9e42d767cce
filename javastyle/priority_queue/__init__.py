from javastyle.priority_queue.priority_queue import (
    EqualityNotSupportedError,
    PriorityQueue,
    QueueConfig,
    QueueFullError,
)
