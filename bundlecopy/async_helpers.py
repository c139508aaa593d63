import asyncio
import atexit


# Synchronous callers (main and the tests) share one event loop, created at
# import time so that anything instantiated early binds to the right loop.
EVENT_LOOP = asyncio.new_event_loop()
asyncio.set_event_loop(EVENT_LOOP)

# Close the loop explicitly on exit, rather than leaving it to __del__.
atexit.register(EVENT_LOOP.close)


def run_task(coro):
    return EVENT_LOOP.run_until_complete(coro)


async def run_in_thread(fn, *args):
    '''Run a blocking call (usually a filesystem primitive) in the running
    loop's default executor and wait for it. Exceptions raised by `fn`
    propagate unchanged to the awaiting coroutine.'''
    loop = asyncio.get_running_loop()
    return (await loop.run_in_executor(None, fn, *args))
