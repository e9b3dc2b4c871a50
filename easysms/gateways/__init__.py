"""Gateway interface and built-in provider adapters.

Every adapter implements the Gateway interface. New providers are added by
implementing Gateway and registering a creator with the dispatcher; the
dispatcher itself never changes.

Usage:
    from easysms.gateways import Gateway, BUILTIN_GATEWAYS

    gateway_class = BUILTIN_GATEWAYS["aliyun"]
"""

from typing import Dict, Type

from easysms.gateways.base import BaseGateway, Gateway
from easysms.gateways.aliyun import AliyunGateway
from easysms.gateways.baidu import BaiduGateway
from easysms.gateways.chuanglan import ChuanglanGateway
from easysms.gateways.errorlog import ErrorlogGateway
from easysms.gateways.luosimao import LuosimaoGateway
from easysms.gateways.qcloud import QcloudGateway
from easysms.gateways.smsbao import SmsbaoGateway
from easysms.gateways.submail import SubmailGateway
from easysms.gateways.twilio import TwilioGateway
from easysms.gateways.ucloud import UcloudGateway
from easysms.gateways.yunpian import YunpianGateway

# Gateway name -> adapter class, registered on every new dispatcher
BUILTIN_GATEWAYS: Dict[str, Type[BaseGateway]] = {
    gateway_class.gateway_name: gateway_class
    for gateway_class in (
        AliyunGateway,
        BaiduGateway,
        ChuanglanGateway,
        ErrorlogGateway,
        LuosimaoGateway,
        QcloudGateway,
        SmsbaoGateway,
        SubmailGateway,
        TwilioGateway,
        UcloudGateway,
        YunpianGateway,
    )
}

__all__ = [
    "Gateway",
    "BaseGateway",
    "BUILTIN_GATEWAYS",
    "AliyunGateway",
    "BaiduGateway",
    "ChuanglanGateway",
    "ErrorlogGateway",
    "LuosimaoGateway",
    "QcloudGateway",
    "SmsbaoGateway",
    "SubmailGateway",
    "TwilioGateway",
    "UcloudGateway",
    "YunpianGateway",
]
