"""
NanoSOAP: a small client for simple interaction with SOAP webservices.
"""
import logging
import xml.etree.ElementTree as ET

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

logger = logging.getLogger(__name__)

XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>'
USER_AGENT = "NanoSOAP for Python"
SOAP_ENV_NAMESPACE = "http://schemas.xmlsoap.org/soap/envelope/"


class NanoSoapClient:
    def __init__(self, endpoint, namespaces=None, timeout=15, max_retries=3):
        self.endpoint = endpoint
        self.namespaces = dict(namespaces or {})
        self.namespaces["SOAP-ENV"] = SOAP_ENV_NAMESPACE
        self.timeout = timeout
        # The XML sent with the last call, kept for debugging
        self.request_body_string = None

        self.session = requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT})
        retries = Retry(total=max_retries, backoff_factor=1,
                        status_forcelist=[429, 500, 502, 503, 504],
                        allowed_methods=["HEAD", "GET", "OPTIONS", "POST"])
        adapter = HTTPAdapter(max_retries=retries)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    def request(self, url, method="GET", body="", headers=None):
        """
        Make an HTTP request. This is usually a SOAP request, but could be used
        for other things.

        Returns the response body, or None on failure.
        """
        kwargs = {"timeout": self.timeout}
        if method == "POST" and body:
            kwargs["data"] = body.encode("utf-8") if isinstance(body, str) else body
        if headers:
            kwargs["headers"] = headers

        try:
            response = self.session.request(method, url, **kwargs)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Request to {url} failed: {e}")
            return None
        return response.text

    def call(self, action, parameters=None):
        """
        Make a SOAP request. The parameters are converted to XML below an
        element named after the action.
        """
        headers = {
            "Content-Type": "text/xml",
            "SOAPAction": action,
        }

        envelope, body = self._build_envelope()
        converted = self.convert_parameter(action, parameters or {})
        if isinstance(converted, list):
            body.extend(converted)
        else:
            body.append(converted)

        self.request_body_string = self._serialize(envelope)
        logger.debug(f"SOAP {action} request: {self.request_body_string}")
        return self.request(self.endpoint, "POST", self.request_body_string, headers)

    def convert_parameter(self, name, value):
        """
        Convert a parameter to an XML element.
        Dicts become nested elements, lists become repeated elements named
        `name`, and a numeric name gives an empty element named by the value.
        """
        if isinstance(value, dict):
            elem = ET.Element(name)
            for key, subvalue in value.items():
                subelem = self.convert_parameter(key, subvalue)
                if isinstance(subelem, list):
                    elem.extend(subelem)
                else:
                    elem.append(subelem)
            return elem
        if isinstance(value, (list, tuple)):
            return self.flatten_array(name, value)
        if isinstance(name, int):
            return ET.Element(str(value))

        elem = ET.Element(name)
        if value is not None:
            elem.text = str(value)
        return elem

    def flatten_array(self, name, values):
        elems = []
        for value in values:
            if isinstance(value, (dict, list, tuple)):
                converted = self.convert_parameter(name, value)
                if isinstance(converted, list):
                    elems.extend(converted)
                else:
                    elems.append(converted)
            else:
                elem = ET.Element(name)
                elem.text = str(value)
                elems.append(elem)
        return elems

    def generate_envelope(self):
        envelope, _ = self._build_envelope()
        return self._serialize(envelope)

    def _build_envelope(self):
        attributes = {}
        for prefix, url in self.namespaces.items():
            attributes["xmlns" if prefix == "" else f"xmlns:{prefix}"] = url
        envelope = ET.Element("SOAP-ENV:Envelope", attributes)
        body = ET.SubElement(envelope, "SOAP-ENV:Body")
        return envelope, body

    def _serialize(self, envelope):
        return XML_HEADER + "\n" + ET.tostring(envelope, encoding="unicode")

    def close(self):
        self.session.close()
