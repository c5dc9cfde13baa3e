from fastapi import BackgroundTasks

from kolab.core.domain.bus import set_event_background


async def inject_event_background(background_tasks: BackgroundTasks):
    """
    Dependency global per-router untuk mengaitkan BackgroundTasks ke EventBus.
    Handler background dan `emit()` akan dijadwalkan ke objek ini.

    Sengaja async agar ContextVar di-set pada task request yang sama, bukan di
    threadpool.
    """
    set_event_background(background_tasks)
    return background_tasks
