import asyncio
import logging

import msgr

async def main():
    logging.basicConfig(level=logging.DEBUG)

    # Both ends live in this process; the scope stands in for the worker's
    # global endpoint
    scope = msgr.WorkerScope(name="demo-worker")

    def on_ping(data, respond):
        print("worker got PING:", data)
        respond({"pong": data})

    W = msgr.worker({"PING": on_ping}, scope)
    C = msgr.client(scope, {"NOTE": lambda data, respond: print("client got NOTE:", data)})

    resp = await C.send("PING", "hello over a MessageChannel")
    print("RESP from worker:", resp)

    # Registered after the handshake, otherwise it also sees the CONNECT marker
    await W.wait_ready()
    W.receive(lambda data, respond: print("worker got untyped:", data))

    W.send("NOTE", {"note": "hello client"})
    C.send("just some data")

    await asyncio.sleep(0.1)

if __name__ == "__main__":
    asyncio.run(main())
