import ssl
import json
import asyncio
import logging
import urllib3

from os import path
from time import sleep
from uuid import uuid4

import aiohttp
from requests import Session
from requests.exceptions import RequestException

from .config.config_path import ConfigPath
from .troubleshoot.errors import RpcFailure, ServiceUnreachable, ConfigFieldFailure

FULL_NODE_SERVICE = "chia_full_node"

# service -> (config section, default rpc port, ssl directory)
SERVICE_RPC = {
    "full_node": ("full_node", 8555, "full_node"),
    "wallet": ("wallet", 9256, "wallet"),
    "farmer": ("farmer", 8559, "farmer"),
    "harvester": ("harvester", 8560, "harvester"),
    "crawler": ("seeder.crawler", 8561, "crawler"),
    "data_layer": ("data_layer", 8562, "data_layer"),
    "timelord": ("timelord", 8557, "timelord"),
}


def is_connection_refused(err):
    # walks the exception chain of aiohttp, requests and urllib3 wrappers
    pending, seen = [err], set()
    while pending:
        current = pending.pop()
        if current is None or id(current) in seen: continue
        seen.add(id(current))
        if isinstance(current,ConnectionRefusedError):
            return True
        pending.extend([
            getattr(current,"os_error",None),
            getattr(current,"reason",None),
            getattr(current,"__cause__",None),
            getattr(current,"__context__",None),
        ])
        pending.extend(arg for arg in getattr(current,"args",()) if isinstance(arg,BaseException))
    return False


class RetryPolicy():

    def __init__(self,max_attempts=1,backoff=None):
        self.max_attempts = max(1,int(max_attempts))
        # linear by default, attempt n (1 based) waits n-1 seconds
        self.backoff = backoff if backoff is not None else lambda attempt: attempt-1
        self.sleeper = sleep


    def run(self,func,description="request"):
        log = logging.getLogger("chiactl")
        for attempt in range(1,self.max_attempts+1):
            if attempt > 1:
                delay = self.backoff(attempt)
                log.debug(f"retrying {description} | attempt [{attempt}] of [{self.max_attempts}] | sleep [{delay}]")
                self.sleeper(delay)
            try:
                return func()
            except ServiceUnreachable:
                raise
            except RpcFailure as e:
                if attempt == self.max_attempts:
                    raise
                log.warning(f"{description} failed on attempt [{attempt}] [{e}]")


def _config_value(config_obj,dotted,default):
    try:
        value = ConfigPath(dotted).get(config_obj)
    except ConfigFieldFailure:
        return default
    return default if value is None else value


class DaemonClient():
    """Administrative websocket channel to the chia daemon."""

    def __init__(self,config_obj,root,retry_policy=None):
        self.log = logging.getLogger("chiactl")
        self.root = root
        self.host = _config_value(config_obj,"self_hostname","localhost")
        self.port = int(_config_value(config_obj,"daemon_port",55400))
        self.url = f"wss://{self.host}:{self.port}"

        self.private_crt = path.join(root,_config_value(config_obj,"daemon_ssl.private_crt","config/ssl/daemon/private_daemon.crt"))
        self.private_key = path.join(root,_config_value(config_obj,"daemon_ssl.private_key","config/ssl/daemon/private_daemon.key"))
        self.ca_crt = path.join(root,_config_value(config_obj,"private_ssl_ca.crt","config/ssl/ca/private_ca.crt"))

        self.retry_policy = retry_policy or RetryPolicy()


    def _ssl_context(self):
        try:
            context = ssl.create_default_context(cafile=self.ca_crt)
            context.check_hostname = False
            context.load_cert_chain(self.private_crt,self.private_key)
        except (OSError, ssl.SSLError) as e:
            raise RpcFailure(f"unable to load daemon certificates from [{self.root}] [{e}]")
        return context


    async def _exchange(self,message):
        timeout = aiohttp.ClientTimeout(total=None,sock_connect=10)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.ws_connect(self.url,ssl=self._ssl_context(),max_msg_size=0) as ws:
                await ws.send_str(json.dumps(message))
                async for msg in ws:
                    if msg.type != aiohttp.WSMsgType.TEXT:
                        break
                    response = json.loads(msg.data)
                    if response.get("request_id") == message["request_id"]:
                        return response
        raise RpcFailure(f"daemon closed the connection before answering [{message['command']}]")


    def _request_once(self,command,data):
        message = {
            "command": command,
            "ack": False,
            "data": data,
            "request_id": uuid4().hex,
            "destination": "daemon",
            "origin": "client",
        }
        self.log.debug(f"daemon request [{command}] data [{data}] url [{self.url}]")
        try:
            response = asyncio.run(self._exchange(message))
        except RpcFailure:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError, ValueError) as e:
            if is_connection_refused(e):
                raise ServiceUnreachable(f"daemon at [{self.url}] refused the connection") from e
            raise RpcFailure(f"daemon request [{command}] failed [{e}]") from e
        return response.get("data",{})


    def request(self,command,data=None):
        return self.retry_policy.run(
            lambda: self._request_once(command,data or {}),
            f"daemon request [{command}]",
        )


    def is_running(self,service=FULL_NODE_SERVICE):
        return bool(self.request("is_running",{"service": service}).get("is_running",False))


    def stop_service(self,service=FULL_NODE_SERVICE):
        return bool(self.request("stop_service",{"service": service}).get("success",False))


    def start_service(self,service=FULL_NODE_SERVICE):
        return bool(self.request("start_service",{"service": service, "testing": False}).get("success",False))


    def get_network_info(self):
        return self.request("get_network_info")


    def get_version(self):
        return self.request("get_version").get("version")


class RpcClient():
    """HTTPS RPC endpoints of the individual chia services."""

    def __init__(self,config_obj,root,service,retry_policy=None,timeout=10):
        urllib3.disable_warnings()
        self.log = logging.getLogger("chiactl")
        if service not in SERVICE_RPC:
            raise RpcFailure(f"unknown chia service [{service}]")
        section, default_port, ssl_dir = SERVICE_RPC[service]

        self.service = service
        self.host = _config_value(config_obj,"self_hostname","localhost")
        self.port = int(_config_value(config_obj,f"{section}.rpc_port",default_port))
        self.base_url = f"https://{self.host}:{self.port}"
        self.cert = (
            path.join(root,_config_value(config_obj,f"{section}.ssl.private_crt",f"config/ssl/{ssl_dir}/private_{ssl_dir}.crt")),
            path.join(root,_config_value(config_obj,f"{section}.ssl.private_key",f"config/ssl/{ssl_dir}/private_{ssl_dir}.key")),
        )
        self.timeout = timeout
        self.retry_policy = retry_policy or RetryPolicy()
        self.session = Session()


    def _fetch_once(self,endpoint,data):
        url = f"{self.base_url}/{endpoint}"
        self.log.debug(f"rpc request [{self.service}] [{url}]")
        try:
            response = self.session.post(url,json=data,cert=self.cert,verify=False,timeout=self.timeout)
            response.raise_for_status()
            result = response.json()
        except (RequestException, OSError) as e:
            if is_connection_refused(e):
                raise ServiceUnreachable(f"{self.service} at [{self.base_url}] refused the connection") from e
            raise RpcFailure(f"{self.service} request [{endpoint}] failed [{e}]") from e
        except ValueError as e:
            raise RpcFailure(f"{self.service} request [{endpoint}] returned invalid json [{e}]") from e

        if not result.get("success",False):
            raise RpcFailure(f"{self.service} request [{endpoint}] was not successful [{result.get('error','unknown error')}]")
        return result


    def fetch(self,endpoint,data=None):
        return self.retry_policy.run(
            lambda: self._fetch_once(endpoint,data or {}),
            f"{self.service} request [{endpoint}]",
        )


    def get_network_info(self):
        return self.fetch("get_network_info")


    def close(self):
        self.session.close()


if __name__ == "__main__":
    print("This class module is not designed to be run independently, please refer to the documentation")
